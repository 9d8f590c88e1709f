# -*- coding: utf-8 -*-

import pytest

from logformat.context import (FormatContext,
                               get_context,
                               set_context,
                               note)


def test_note_no_handlers():
    ctx = FormatContext()
    assert ctx.note('anything', 'goes %r', 'nowhere') is None


def test_note_handlers():
    notes = []
    ctx = FormatContext(note_handlers=[lambda name, msg: notes.append((name, msg))])
    ctx.note('test_note', 'got %r and %s', 'a', 2)
    ctx.note('bad_args', 'one arg %s %s', 'only')
    assert notes == [('test_note', "got 'a' and 2"),
                     ('bad_args', 'one arg %s %s')]
    assert 'note_handlers' in repr(ctx)


def test_global_context():
    orig = get_context()
    notes = []
    try:
        ctx = set_context(FormatContext(note_handlers=[
            lambda name, msg: notes.append(name)]))
        assert get_context() is ctx
        note('global_note', 'hi')
        assert notes == ['global_note']
    finally:
        set_context(orig)
    assert get_context() is orig


def test_bad_kwargs():
    with pytest.raises(TypeError):
        FormatContext(handlers=[])
