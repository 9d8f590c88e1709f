# -*- coding: utf-8 -*-
"""Implements the :class:`LineFormatter`, which renders
:class:`~logformat.request.RequestContext` instances into access log
lines and writes them to a sink.
"""

import time
from threading import RLock

from logformat.context import get_context
from logformat.compiler import compile_format, BUILTIN_CODES
from logformat.emitters import StreamEmitter
from logformat.fields import (BUILTIN_FIELD_MAP, NIL_FIELD,
                              make_time_field, nil_or_string)
from logformat.request import RequestContext


__all__ = ['LineFormatter', 'COMMON_FORMAT', 'COMBINED_FORMAT',
           'COMMON_LOG', 'COMBINED_LOG']


COMMON_FORMAT = '%h %l %u %t "%r" %>s %b'
COMBINED_FORMAT = COMMON_FORMAT + ' "%{Referer}i" "%{User-agent}i"'


def _make_header_renderer(get_headers, fname, nil_field):
    def render(ctx):
        return nil_or_string(get_headers(ctx).get(fname), nil_field)
    return render


def _get_req_headers(ctx):
    return ctx.request.headers


def _get_resp_headers(ctx):
    return ctx.resp_headers


def _render_nothing(ctx):
    return ''


def _resolve_sink(sink):
    if sink in ('stderr', 'stdout'):
        return StreamEmitter(sink)
    if not callable(getattr(sink, 'write', None)):
        raise TypeError('expected sink with a write() method, or shortcut'
                        ' values "stderr" or "stdout", not: %r' % (sink,))
    return sink


class LineFormatter(object):
    """The ``LineFormatter`` renders one line per served request,
    according to an Apache-style format string, e.g.,
    ``'%h %l %u %t "%r" %>s %b'``, and writes it to a sink.

    Args:
        format_str (str): The format to render. See
            :func:`~logformat.compiler.compile_format`.
        sink: Any object with a ``write()`` method, or one of the
            shortcut strings ``"stderr"`` and ``"stdout"``.
            Defaults to ``"stderr"``.
        extra_fields (list): Optionally specify
            :class:`~logformat.fields.LogField` instances this
            Formatter should recognize in addition to, or instead of,
            the builtins.
        nil_field (str): What to render for unavailable values.
            Defaults to ``'-'``.
        clock (callable): Returns the current UNIX timestamp, for
            ``%t``. Defaults to :func:`time.time`.
        local_time (bool): Whether ``%t`` renders local time (the
            default) or UTC.
        context: The :class:`~logformat.context.FormatContext` to
            send notes to. Defaults to the global context.

    The format string is compiled once, and each directive bound to
    its render function, at construction. After that a Formatter
    holds no per-request state, so it can be called from any number
    of threads.

    >>> from logformat.emitters import AggregateEmitter
    >>> from logformat.request import Request, RequestContext
    >>> fmtr = LineFormatter('%m %U %q %H', sink=AggregateEmitter())
    >>> fmtr.format(RequestContext(Request('GET', '/foo?bar=baz'), 200))
    'GET /foo ?bar=baz HTTP/1.1'
    """
    def __init__(self, format_str, sink='stderr', **kwargs):
        extra_fields = kwargs.pop('extra_fields', None)
        self.nil_field = kwargs.pop('nil_field', NIL_FIELD)
        self.clock = kwargs.pop('clock', time.time)
        self.local_time = kwargs.pop('local_time', True)
        self.context = kwargs.pop('context', None) or get_context()
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))
        if not callable(self.clock):
            raise TypeError('expected callable for clock, not %r'
                            % (self.clock,))

        self._field_map = dict(BUILTIN_FIELD_MAP)
        self._field_map['t'] = make_time_field(self.clock, self.local_time)
        if extra_fields:
            extra_field_map = dict([(f.code, f) for f in extra_fields])
            self._field_map.update(extra_field_map)

        codes = BUILTIN_CODES | frozenset(self._field_map)
        self.compiled = compile_format(format_str, codes=codes)
        for raw in self.compiled.degraded:
            self.context.note('degraded_directive',
                              'rendering %r verbatim in format %r',
                              raw, format_str)
        self._renderers = tuple(self._bind(seg) for seg in self.compiled)

        self._lock = RLock()
        self.sink = _resolve_sink(sink)

    @property
    def raw_format_str(self):
        return self.compiled.raw_format

    def _bind(self, seg):
        if isinstance(seg, str):
            return seg
        try:
            fclass = seg.field_class
        except AttributeError:
            if seg.code == '%':
                return '%'
            return self._field_map[seg.code].bind(self.nil_field)
        if fclass == 'i':
            return _make_header_renderer(_get_req_headers, seg.fname,
                                         self.nil_field)
        elif fclass == 'o':
            return _make_header_renderer(_get_resp_headers, seg.fname,
                                         self.nil_field)
        # TODO: %{format}t should render the request time with a strftime format
        return _render_nothing

    def format(self, ctx):
        """Render *ctx*, a :class:`~logformat.request.RequestContext`,
        into a single line of text. No newline is appended.
        """
        ret = []
        for r in self._renderers:
            if r.__class__ is str:
                ret.append(r)  # literal text
            else:
                ret.append(r(ctx))
        return ''.join(ret)

    __call__ = format

    def format_request(self, request, status, resp_headers=None, elapsed=0):
        ctx = RequestContext(request, status, resp_headers, elapsed)
        return self.format(ctx)

    def write_line(self, ctx):
        """Render *ctx* and write the result to the sink, in exactly one
        ``write()`` call. Errors from the sink are noted and re-raised.
        Returns the rendered line.
        """
        line = self.format(ctx)
        with self._lock:
            sink = self.sink
            try:
                sink.write(line)
            except Exception as e:
                self.context.note('write_line', 'got %r on %r.write()',
                                  e, sink)
                raise
        return line

    def log_line(self, request, status, resp_headers=None, elapsed=0):
        ctx = RequestContext(request, status, resp_headers, elapsed)
        return self.write_line(ctx)

    def set_output(self, sink):
        sink = _resolve_sink(sink)
        with self._lock:
            self.sink = sink
        return

    def clone(self, sink=None):
        """Returns a new LineFormatter with the same format and field
        bindings. The clone gets its own sink attribute and lock, so
        :meth:`set_output` on one never redirects the other. If *sink*
        is not passed, the clone starts out writing to the same sink
        as this Formatter.
        """
        ret = self.__class__.__new__(self.__class__)
        ret.__dict__.update(self.__dict__)
        ret._lock = RLock()
        with self._lock:
            ret.sink = self.sink if sink is None else _resolve_sink(sink)
        return ret

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r, sink=%r)' % (cn, self.raw_format_str, self.sink)


COMMON_LOG = LineFormatter(COMMON_FORMAT, 'stderr')
COMBINED_LOG = LineFormatter(COMBINED_FORMAT, 'stderr')
