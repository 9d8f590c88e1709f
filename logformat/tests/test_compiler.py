# -*- coding: utf-8 -*-

import pytest

from logformat.compiler import (compile_format,
                                CompiledFormat,
                                Directive as D,
                                ParamDirective as PD)


def test_compile_basic():
    cf = compile_format('%h %l %u %t "%r" %>s %b')
    assert cf.segments == (D('h', '%h'), ' ', D('l', '%l'), ' ',
                           D('u', '%u'), ' ', D('t', '%t'), ' "',
                           D('r', '%r'), '" ', D('s', '%>s'), ' ',
                           D('b', '%b'))
    assert not cf.degraded
    assert len(cf) == 13
    assert len(cf.directives) == 7
    assert repr(cf) == "CompiledFormat('%h %l %u %t \"%r\" %>s %b')"


def test_compile_params():
    cf = compile_format('"%{Referer}i" %{X-Resp}o %{%d/%b}t %{}i')
    assert cf.segments == ('"', PD('i', 'Referer', '%{Referer}i'), '" ',
                           PD('o', 'X-Resp', '%{X-Resp}o'), ' ',
                           PD('t', '%d/%b', '%{%d/%b}t'), ' ',
                           PD('i', '', '%{}i'))


def test_modifiers():
    cf = compile_format('%s%>s%<s')
    assert [seg.code for seg in cf] == ['s', 's', 's']
    assert [seg.raw for seg in cf] == ['%s', '%>s', '%<s']


def test_literal_only():
    for tmpl in ['', 'hello', 'no directives here, just text {}']:
        cf = compile_format(tmpl)
        assert ''.join(cf.segments) == tmpl
        assert not cf.degraded


def test_percent():
    cf = compile_format('This should be a verbatim percent sign -> %%')
    assert cf.segments == ('This should be a verbatim percent sign -> ',
                           D('%', '%%'))


def test_stray_percent():
    tmpl = 'stray percent at the end: %'
    cf = compile_format(tmpl)
    assert cf.segments == (tmpl,)
    assert cf.degraded == ('%',)

    cf = compile_format('100% done')
    assert cf.segments == ('100% done',)
    assert cf.degraded == ('% ',)


def test_unterminated_brace():
    tmpl = 'Missing closing brace: %{Test <- this should be verbatim'
    cf = compile_format(tmpl)
    assert cf.segments == (tmpl,)
    assert cf.degraded == ('%{Test <- this should be verbatim',)

    # directives after an unclosed brace are part of the remainder
    cf = compile_format('%h %{Test %h')
    assert cf.segments == (D('h', '%h'), ' %{Test %h')


def test_brace_closed_by_other_letter():
    cf = compile_format('%{a}z %h')
    assert cf.segments == ('%{a}z ', D('h', '%h'))
    assert cf.degraded == ('%{a}z',)

    cf = compile_format('%{a}%h %{Referer}')
    assert cf.segments == ('%{a}', D('h', '%h'), ' %{Referer}')
    assert cf.degraded == ('%{a}', '%{Referer}')


def test_unknown_directive():
    cf = compile_format('a %Z b %>z c')
    assert cf.segments == ('a %Z b %>z c',)
    assert cf.degraded == ('%Z', '%>z')


def test_custom_codes():
    cf = compile_format('%v %h', codes='v')
    assert cf.segments == (D('v', '%v'), ' %h')
    assert cf.degraded == ('%h',)


def test_immutable_and_equal():
    cf = compile_format('%h %{Referer}i')
    with pytest.raises(AttributeError):
        cf.segments = ()
    assert cf == compile_format('%h %{Referer}i')
    assert hash(cf) == hash(compile_format('%h %{Referer}i'))
    assert cf != compile_format('%h')
    assert isinstance(cf, CompiledFormat)
    assert cf[0] == D('h', '%h')


def test_bad_input():
    with pytest.raises(TypeError):
        compile_format(b'%h')
    with pytest.raises(TypeError):
        compile_format(None)
