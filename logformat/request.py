# -*- coding: utf-8 -*-
"""Plain value types describing one request/response exchange, as
handed over by whatever HTTP server is doing the actual serving.
"""

import datetime
from urllib.parse import urlsplit

from boltons.dictutils import OrderedMultiDict as OMD


__all__ = ['Headers', 'Request', 'RequestContext']


class Headers(object):
    """A case-insensitive, multi-valued map of header names to values.

    Accepts a mapping (values may be strings or lists of strings), an
    iterable of ``(name, value)`` pairs, or another Headers. Lookups
    ignore case, iteration yields names as first given.

    >>> h = Headers({'User-Agent': 'curl/8.0', 'Accept': ['a', 'b']})
    >>> h.get('user-agent')
    'curl/8.0'
    >>> h.getlist('ACCEPT')
    ['a', 'b']
    """
    def __init__(self, headers=None):
        self._values = OMD()
        self._names = {}
        if headers is None:
            return
        if isinstance(headers, Headers):
            items = headers.items(multi=True)
        elif hasattr(headers, 'items'):
            items = headers.items()
        else:
            items = headers
        for name, value in items:
            if isinstance(value, (list, tuple)):
                for v in value:
                    self.add(name, v)
            else:
                self.add(name, value)

    def add(self, name, value):
        key = name.lower()
        self._names.setdefault(key, name)
        self._values.add(key, value)

    def __setitem__(self, name, value):
        key = name.lower()
        self._names[key] = name
        self._values[key] = value

    def __getitem__(self, name):
        try:
            return self._values.getlist(name.lower())[0]
        except IndexError:
            raise KeyError(name)

    def __delitem__(self, name):
        key = name.lower()
        del self._values[key]
        del self._names[key]

    def get(self, name, default=None):
        "Get the first value for header *name*, or *default*."
        values = self._values.getlist(name.lower())
        if values:
            return values[0]
        return default

    def getlist(self, name):
        return self._values.getlist(name.lower())

    def items(self, multi=False):
        return [(self._names[k], v) for k, v in self._values.items(multi=multi)]

    def __contains__(self, name):
        return name.lower() in self._values

    def __iter__(self):
        return iter([self._names[k] for k in self._values])

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Headers):
            return NotImplemented
        return (self._values.items(multi=True)
                == other._values.items(multi=True))

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.items(multi=True))


def _split_target(target):
    """Returns the ``(path, query)`` of a request target. Only absolute
    URLs go through :func:`urlsplit`, since it would read an
    origin-form target like ``//etc/passwd`` as a host and a path.
    """
    if target.startswith('/') or target == '*':
        path, _, query = target.partition('?')
        return path, query
    split = urlsplit(target)
    return split.path, split.query


class Request(object):
    """The inbound half of the exchange.

    Args:
        method (str): e.g., ``'GET'``
        target (str): The request target, as received. Either
            origin-form (``'/foo?bar=baz'``) or an absolute URL.
        proto (str): Protocol version, defaults to ``'HTTP/1.1'``.
        remote_addr (str): The client's address.
        headers: Anything :class:`Headers` accepts.
    """
    def __init__(self, method='', target='', proto='HTTP/1.1',
                 remote_addr='', headers=None):
        self.method = method
        self.target = target
        self.proto = proto
        self.remote_addr = remote_addr
        if not isinstance(headers, Headers):
            headers = Headers(headers)
        self.headers = headers
        self.path, self.query = _split_target(target)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s method=%r target=%r proto=%r remote_addr=%r>'
                % (cn, self.method, self.target, self.proto, self.remote_addr))


def _to_usecs(elapsed):
    if not elapsed:
        return 0
    if isinstance(elapsed, datetime.timedelta):
        return ((elapsed.days * 86400 + elapsed.seconds) * 1000000
                + elapsed.microseconds)
    if isinstance(elapsed, bool) or not isinstance(elapsed, int):
        raise TypeError('expected elapsed time as int microseconds'
                        ' or timedelta, not %r' % (elapsed,))
    return elapsed


class RequestContext(object):
    """Everything a Formatter needs to render one line. Build a fresh
    one for every request.

    Args:
        request (Request): The request being logged.
        status (int): The response status code.
        resp_headers: The response headers, anything :class:`Headers`
            accepts.
        elapsed: Time taken to serve the request, as an int number of
            microseconds or a :class:`datetime.timedelta`. ``0`` or
            ``None`` means the time wasn't measured.
    """
    __slots__ = ('request', 'status', 'resp_headers', 'elapsed_us')

    def __init__(self, request, status, resp_headers=None, elapsed=0):
        self.request = request
        self.status = status
        if not isinstance(resp_headers, Headers):
            resp_headers = Headers(resp_headers)
        self.resp_headers = resp_headers
        self.elapsed_us = max(_to_usecs(elapsed), 0)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s request=%r status=%r elapsed_us=%r>'
                % (cn, self.request, self.status, self.elapsed_us))
