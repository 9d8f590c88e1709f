# -*- coding: utf-8 -*-
"""Turns an Apache-style ``LogFormat`` string into a
:class:`CompiledFormat`, an immutable sequence of segments. Literal
text segments are plain strings, directives are :class:`Directive`
and :class:`ParamDirective` tuples.

>>> cf = compile_format('%h "%{Referer}i" 100%%')
>>> cf.segments[0]
Directive(code='h', raw='%h')
>>> cf.segments[2]
ParamDirective(field_class='i', fname='Referer', raw='%{Referer}i')

Compilation never fails for any string. Text that looks like a
directive but isn't one is kept as literal text, and recorded on
:attr:`CompiledFormat.degraded`.
"""

import re
from collections import namedtuple


__all__ = ['compile_format', 'CompiledFormat', 'Directive', 'ParamDirective',
           'BUILTIN_CODES', 'PARAM_CLASSES']


BUILTIN_CODES = frozenset('hlutrsbmqDTHUp')
PARAM_CLASSES = frozenset('iot')

Directive = namedtuple('Directive', 'code raw')
ParamDirective = namedtuple('ParamDirective', 'field_class fname raw')


_directive_re = re.compile(r'%(?:'
                           r'(%)|'                           # escaped percent
                           r'\{([^}]*)\}([' + ''.join(sorted(PARAM_CLASSES)) + '])|'
                           r'(\{[^}]*\Z)|'                   # unterminated brace
                           r'([<>]?)([A-Za-z]))')            # single letter
_stray_brace_re = re.compile(r'%\{[^}]*\}[A-Za-z]?')


class CompiledFormat(object):
    """The result of :func:`compile_format`. Behaves like a read-only
    sequence of segments. Nothing about a specific request is ever
    stored here, so a single instance can be shared by any number of
    formatters and threads.
    """
    __slots__ = ('raw_format', 'segments', 'degraded')

    def __init__(self, raw_format, segments, degraded=()):
        object.__setattr__(self, 'raw_format', raw_format)
        object.__setattr__(self, 'segments', tuple(segments))
        object.__setattr__(self, 'degraded', tuple(degraded))

    def __setattr__(self, name, value):
        raise AttributeError('%s is immutable' % self.__class__.__name__)

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    def __getitem__(self, idx):
        return self.segments[idx]

    def __eq__(self, other):
        if not isinstance(other, CompiledFormat):
            return NotImplemented
        return (self.raw_format == other.raw_format
                and self.segments == other.segments)

    def __ne__(self, other):
        ret = self.__eq__(other)
        if ret is NotImplemented:
            return ret
        return not ret

    def __hash__(self):
        return hash((self.raw_format, self.segments))

    @property
    def directives(self):
        return [s for s in self.segments if not isinstance(s, str)]

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.raw_format)


def compile_format(format_str, codes=None):
    """Parse *format_str* into a :class:`CompiledFormat`.

    Args:
        format_str (str): An Apache-style format, e.g.,
            ``'%h %l %u %t "%r" %>s %b'``.
        codes: Optionally, the set of single-letter directive codes
            to recognize. Defaults to :data:`BUILTIN_CODES`.

    ``%%`` and ``%{name}i``/``%{name}o``/``%{name}t`` are always
    recognized. The ``<`` and ``>`` modifiers are accepted and
    dropped, so ``%>s`` compiles to the same code as ``%s``. A ``%``
    that doesn't start a recognized directive stays in the output as
    is, and an unclosed ``%{`` turns the rest of the format into
    literal text.
    """
    if not isinstance(format_str, str):
        raise TypeError('expected format string, not %r' % (format_str,))
    codes = BUILTIN_CODES if codes is None else frozenset(codes)

    segments, degraded = [], []
    literal, prev_end = '', 0
    for match in _directive_re.finditer(format_str):
        start, end = match.start(), match.end()
        gap = format_str[prev_end:start]
        degraded.extend(_find_stray(format_str, prev_end, start))
        literal += gap
        prev_end = end
        raw = match.group()
        pct, fname, fclass, unclosed, _, code = match.groups()
        if pct:
            seg = Directive('%', raw)
        elif fclass:
            seg = ParamDirective(fclass, fname, raw)
        elif unclosed or code not in codes:
            degraded.append(raw)
            literal += raw
            continue
        else:
            seg = Directive(code, raw)
        if literal:
            segments.append(literal)
            literal = ''
        segments.append(seg)

    tail = format_str[prev_end:]
    degraded.extend(_find_stray(format_str, prev_end, len(format_str)))
    literal += tail
    if literal:
        segments.append(literal)
    return CompiledFormat(format_str, segments, degraded)


def _find_stray(format_str, start, end):
    # every % the directive pattern skipped over, e.g., a trailing %
    # or %{name} closed by something other than i, o, or t
    ret = []
    for i in range(start, end):
        if format_str[i] != '%':
            continue
        match = _stray_brace_re.match(format_str, i)
        ret.append(match.group() if match else format_str[i:i + 2])
    return ret
