# -*- coding: utf-8 -*-

import datetime

import pytest

from logformat.request import Headers, Request, RequestContext


def test_headers_case_insensitive():
    h = Headers({'User-Agent': 'curl/8.0', 'Accept': ['a', 'b']})
    assert h.get('user-agent') == 'curl/8.0'
    assert h['USER-AGENT'] == 'curl/8.0'
    assert h.getlist('accept') == ['a', 'b']
    assert h.get('Accept') == 'a'
    assert 'accept' in h
    assert 'Referer' not in h
    assert h.get('Referer') is None
    assert h.get('Referer', '-') == '-'
    assert h.getlist('Referer') == []
    with pytest.raises(KeyError):
        h['Referer']
    assert len(h) == 2
    assert list(h) == ['User-Agent', 'Accept']


def test_headers_mutation():
    h = Headers([('X-A', '1'), ('x-a', '2')])
    assert h.getlist('X-A') == ['1', '2']
    assert len(h) == 1

    h['X-A'] = '3'
    assert h.getlist('x-a') == ['3']
    h.add('X-B', 'b')
    assert h.items() == [('X-A', '3'), ('X-B', 'b')]

    del h['x-b']
    assert 'X-B' not in h
    assert h == Headers({'x-a': '3'})
    assert 'X-A' in repr(h)


def test_headers_copy():
    orig = Headers({'A': ['1', '2']})
    copy = Headers(orig)
    assert copy == orig
    copy.add('A', '3')
    assert orig.getlist('A') == ['1', '2']


def test_request_target():
    req = Request('GET', 'http://example.org/foo?bar=baz')
    assert req.path == '/foo'
    assert req.query == 'bar=baz'
    assert req.proto == 'HTTP/1.1'

    req = Request('GET', '/search?q=a+b&x=1', proto='HTTP/2.0',
                  remote_addr='::1')
    assert req.path == '/search'
    assert req.query == 'q=a+b&x=1'
    assert 'HTTP/2.0' in repr(req)

    # origin-form targets keep leading slashes, no host is split off
    req = Request('GET', '//etc/passwd?x=1')
    assert req.path == '//etc/passwd'
    assert req.query == 'x=1'
    req = Request('GET', '//evil.example//a?b?c')
    assert req.path == '//evil.example//a'
    assert req.query == 'b?c'
    req = Request('OPTIONS', '*')
    assert req.path == '*'
    assert req.query == ''

    req = Request()
    assert req.path == ''
    assert req.query == ''
    assert len(req.headers) == 0


def test_context_elapsed():
    req = Request()
    assert RequestContext(req, 200).elapsed_us == 0
    assert RequestContext(req, 200, elapsed=None).elapsed_us == 0
    assert RequestContext(req, 200, elapsed=-5).elapsed_us == 0
    assert RequestContext(req, 200, elapsed=1500000).elapsed_us == 1500000

    td = datetime.timedelta(days=1, seconds=2, microseconds=3)
    assert RequestContext(req, 200, elapsed=td).elapsed_us == 86402000003

    with pytest.raises(TypeError):
        RequestContext(req, 200, elapsed=1.5)
    with pytest.raises(TypeError):
        RequestContext(req, 200, elapsed=True)


def test_context_headers():
    ctx = RequestContext(Request(), 200, {'Content-Length': '10'})
    assert isinstance(ctx.resp_headers, Headers)
    assert ctx.resp_headers.get('content-length') == '10'
    assert len(RequestContext(Request(), 200).resp_headers) == 0
    assert 'status=200' in repr(ctx)
