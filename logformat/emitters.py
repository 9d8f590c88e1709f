# -*- coding: utf-8 -*-
"""Emitters are sinks which take a rendered log line in *text-form*
and output it to a persistence resource, such as stdout/stderr, files,
or an in-memory buffer. Any object with a ``write()`` method can
serve as a :class:`~logformat.formatter.LineFormatter` sink; emitters
add encoding, line separation, and flushing on top.
"""

import io
import os
import sys
import codecs
import errno
from collections import deque

from logformat.context import note


__all__ = ['AggregateEmitter', 'StreamEmitter', 'FileEmitter']


DEFAULT_ERRORS = 'backslashreplace'
_STREAM_KWARGS = frozenset(['errors', 'sep', 'reopen_stale'])


class AggregateEmitter(object):
    "Collects entries in memory, mostly for testing."
    def __init__(self, limit=None):
        self._limit = limit
        self.items = deque(maxlen=limit)

    def get_entries(self):
        return list(self.items)

    def get_entry(self, idx):
        return self.items[idx]

    def clear(self):
        self.items.clear()

    def write(self, entry):
        self.items.append(entry)

    def __repr__(self):
        cn = self.__class__.__name__
        args = (cn, self._limit, len(self.items))
        msg = '<%s limit=%r entry_count=%r>' % args
        return msg


def _check_encoding(encoding, errors):
    # both raise LookupError on unknown names
    codecs.lookup(encoding)
    codecs.lookup_error(errors)


def _check_kwargs(kwargs):
    unknown = set(kwargs) - _STREAM_KWARGS
    if unknown:
        raise TypeError('unexpected keyword arguments: %r' % sorted(unknown))


def _get_sys_stream(name):
    stream = getattr(sys, name, None)
    return getattr(stream, 'buffer', stream)


class StreamEmitter(object):
    '''Writes entries to streams, be they BytesIO or console
    (stdout/stderr). Binary streams get encoded bytes, text streams
    get text.

    The shortcut values ``"stdout"`` and ``"stderr"`` are looked up
    on :mod:`sys` at write time, so redirecting ``sys.stderr`` later
    also redirects the emitter. If the console stream is ``None``, as
    under pythonw, entries are dropped.

    Avoid using StreamEmitter directly when you have a file path for
    your log file. Use FileEmitter instead.

    No separator is written between entries unless *sep* is passed,
    e.g., ``sep='\\n'``.
    '''
    def __init__(self, stream, encoding=None, **kwargs):
        self._sys_name = None
        if stream in ('stdout', 'stderr'):
            self._sys_name, stream = stream, None
        elif not callable(getattr(stream, 'write', None)):
            raise TypeError('%s expected a writable stream, or shortcut'
                            ' values "stderr" or "stdout", not: %r'
                            % (self.__class__.__name__, stream))
        if encoding is None:
            encoding = getattr(stream, 'encoding', None) or 'UTF-8'
        errors = kwargs.get('errors', DEFAULT_ERRORS)
        _check_encoding(encoding, errors)
        _check_kwargs(kwargs)

        self._stream = stream
        self._stream_name = getattr(stream, 'name', None)
        self.sep = kwargs.get('sep') or ''
        self.errors = errors
        self.encoding = encoding
        self._reopen_stale = kwargs.get('reopen_stale', True)

    @property
    def stream(self):
        if self._sys_name:
            return _get_sys_stream(self._sys_name)
        return self._stream

    @stream.setter
    def stream(self, stream):
        self._stream = stream

    def _encode(self, entry, stream):
        entry += self.sep
        if isinstance(stream, io.TextIOBase):
            return entry
        return entry.encode(self.encoding, self.errors)

    def write(self, entry):
        stream = self.stream
        if stream is None and self._sys_name:
            return
        data = self._encode(entry, stream)
        try:
            stream.write(data)
            self.flush()
        except Exception as e:
            note('stream_emit', 'got %r on %r.write()', e, self)
            if (isinstance(e, OSError)
                    and self._reopen_stale
                    and e.errno == errno.ESTALE):
                name = self._stream_name
                if name and name not in ('<stdout>', '<stderr>'):
                    # NB: Stale file handles are pretty common on
                    # network file systems, so we try to reopen the file
                    note('stream_emit', 'reopening stale stream to %r', name)
                    binary = not isinstance(stream, io.TextIOBase)
                    self.stream = open(name, 'ab' if binary else 'a')

                    # retry writing once
                    self.stream.write(data)
                    self.flush()
                    return
            raise
        return

    def flush(self):
        stream_flush = getattr(self.stream, 'flush', None)
        if not callable(stream_flush):
            return
        try:
            stream_flush()
        except Exception as e:
            note('stream_flush', 'got %r on %r.flush()', e, self)

    def __repr__(self):
        stream = self._sys_name or self.stream
        return '<%s stream=%r>' % (self.__class__.__name__, stream)


class FileEmitter(StreamEmitter):
    """
    The convenient and correct way to write access logs to a file
    when you have a path available. Unlike StreamEmitter, entries are
    separated by :data:`os.linesep` unless told otherwise.

    Settings are validated before the file is opened, so a bad
    *encoding* or keyword argument never creates or truncates it.
    """
    def __init__(self, filepath, encoding='utf-8', **kwargs):
        self.filepath = os.path.abspath(filepath)
        mode = 'ab' if not kwargs.pop('overwrite', False) else 'wb'
        kwargs.setdefault('sep', os.linesep)
        _check_encoding(encoding, kwargs.get('errors', DEFAULT_ERRORS))
        _check_kwargs(kwargs)
        stream = io.open(self.filepath, mode)
        super(FileEmitter, self).__init__(stream, encoding=encoding, **kwargs)

    def close(self):
        if self.stream is None:
            return
        try:
            self.flush()
            if self.stream:
                self.stream.close()
                self.stream = None
        except Exception as e:
            note('file_close', 'got %r on %r.close()', e, self)
