# -*- coding: utf-8 -*-

from logformat.context import get_context, set_context, FormatContext

from logformat.compiler import (compile_format,
                                CompiledFormat,
                                Directive,
                                ParamDirective)
from logformat.fields import LogField, NIL_FIELD
from logformat.request import Headers, Request, RequestContext
from logformat.emitters import StreamEmitter, FileEmitter, AggregateEmitter
from logformat.formatter import (LineFormatter,
                                 COMMON_FORMAT,
                                 COMBINED_FORMAT,
                                 COMMON_LOG,
                                 COMBINED_LOG)
