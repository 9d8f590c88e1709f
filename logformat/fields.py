# -*- coding: utf-8 -*-
"""logformat comes with a built-in *field* for every single-letter
directive it compiles. A :class:`LogField` pairs a directive code
with a getter, which takes a
:class:`~logformat.request.RequestContext` and returns the value to
render, and a policy for what to render when that value is empty.

+------+-------------------------------+----------------+
| Code | Value                         | When empty     |
+======+===============================+================+
| h    | remote address                | ``-``          |
+------+-------------------------------+----------------+
| l    | remote logname (unsupported)  | ``-``          |
+------+-------------------------------+----------------+
| u    | remote user (unsupported)     | ``-``          |
+------+-------------------------------+----------------+
| t    | time of rendering             | n/a            |
+------+-------------------------------+----------------+
| r    | request line                  | n/a            |
+------+-------------------------------+----------------+
| s    | status code                   | n/a            |
+------+-------------------------------+----------------+
| b    | response Content-Length       | ``-``          |
+------+-------------------------------+----------------+
| m    | method                        | empty string   |
+------+-------------------------------+----------------+
| q    | query string, with leading ?  | empty string   |
+------+-------------------------------+----------------+
| D    | elapsed time, microseconds    | empty string   |
+------+-------------------------------+----------------+
| T    | elapsed time, whole seconds   | empty string   |
+------+-------------------------------+----------------+
| H    | protocol                      | empty string   |
+------+-------------------------------+----------------+
| U    | URL path                      | empty string   |
+------+-------------------------------+----------------+
| p    | process id                    | n/a            |
+------+-------------------------------+----------------+
"""

import os
import datetime

from boltons.timeutils import UTC, LocalTZ


NIL_FIELD = '-'

# strftime's %b follows the locale, Apache's doesn't
_MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
           'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

BUILTIN_FIELD_MAP = {}  # populated below


def register_builtin_field(field):
    BUILTIN_FIELD_MAP[field.code] = field


def nil_or_string(value, nil=NIL_FIELD):
    if value is None or value == '':
        return nil
    return str(value)


def timestamp2apache(timestamp, local=True):
    """Render a UNIX timestamp the way Apache's ``%t`` does, minus the
    square brackets, e.g., ``'10/Oct/2000:13:55:36 -0700'``.
    """
    if local:
        dt = datetime.datetime.fromtimestamp(timestamp, tz=LocalTZ)
    else:
        dt = datetime.datetime.fromtimestamp(timestamp, tz=UTC)
    return '%02d/%s/%04d:%02d:%02d:%02d %s' % (dt.day, _MONTHS[dt.month - 1],
                                               dt.year, dt.hour, dt.minute,
                                               dt.second, dt.strftime('%z'))


class LogField(object):
    """Fields know where their value comes from and whether an empty
    value should be rendered as the nil marker (``-``) or as nothing
    at all. Exactly what the nil marker is, that's up to the
    Formatter.

    Args:
        code (str): The single-letter directive code, e.g., ``'h'``.
        getter (callable): Takes a RequestContext, returns the value.
        nil (bool): Whether empty values render as the nil marker.
            Defaults to ``False``, meaning empty values render as an
            empty string.
    """
    def __init__(self, code, getter, **kwargs):
        nil = kwargs.pop('nil', False)
        doc = kwargs.pop('doc', '')
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))
        if not isinstance(code, str) or len(code) != 1 or not code.isalpha():
            raise ValueError('expected single-letter directive code, not %r'
                             % (code,))
        if not callable(getter):
            raise TypeError('expected callable getter, not %r' % (getter,))
        self.code = code
        self.getter = getter
        self.nil = nil
        self.doc = doc

    def bind(self, nil_field=NIL_FIELD):
        """Returns a single-argument render function for this field,
        with the empty-value policy baked in.
        """
        getter = self.getter
        if self.nil:
            def render(ctx):
                return nil_or_string(getter(ctx), nil_field)
        else:
            def render(ctx):
                value = getter(ctx)
                if value is None:
                    return ''
                return str(value)
        return render

    def __repr__(self):
        return '%s(%r, nil=%r)' % (self.__class__.__name__, self.code, self.nil)


def _get_query(ctx):
    query = ctx.request.query
    if query:
        return '?' + query
    return ''


def _get_request_line(ctx):
    req = ctx.request
    return '%s %s %s' % (req.method, req.target, req.proto)


def _get_elapsed_secs(ctx):
    elapsed_us = ctx.elapsed_us
    if elapsed_us > 0:
        return elapsed_us // 1000000
    return ''


def _get_elapsed_usecs(ctx):
    elapsed_us = ctx.elapsed_us
    if elapsed_us > 0:
        return elapsed_us
    return ''


_LF = LogField
BASIC_FIELDS = [_LF('h', lambda ctx: ctx.request.remote_addr, nil=True,
                    doc='remote address'),
                _LF('l', lambda ctx: None, nil=True,
                    doc='remote logname, never available'),
                _LF('u', lambda ctx: None, nil=True,
                    doc='remote user, never available'),
                _LF('r', _get_request_line, doc='first line of the request'),
                _LF('s', lambda ctx: ctx.status, doc='status code'),
                _LF('b', lambda ctx: ctx.resp_headers.get('Content-Length'),
                    nil=True, doc='response size, from Content-Length'),
                _LF('m', lambda ctx: ctx.request.method, doc='method'),
                _LF('q', _get_query, doc='query string, including the ?'),
                _LF('H', lambda ctx: ctx.request.proto, doc='protocol'),
                _LF('U', lambda ctx: ctx.request.path, doc='URL path'),
                _LF('p', lambda ctx: os.getpid(), doc='process id')]

ELAPSED_FIELDS = [_LF('D', _get_elapsed_usecs,
                      doc='time taken to serve the request, microseconds'),
                  _LF('T', _get_elapsed_secs,
                      doc='time taken to serve the request, seconds')]


def make_time_field(clock, local=True):
    # %t reads the clock at render time, so each formatter builds its own
    return LogField('t', lambda ctx: timestamp2apache(clock(), local=local),
                    doc='time the line was rendered')


for f in BASIC_FIELDS:
    register_builtin_field(f)
for f in ELAPSED_FIELDS:
    register_builtin_field(f)

del f
