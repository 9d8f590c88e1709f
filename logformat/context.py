# -*- coding: utf-8 -*-

LOGFORMAT_CONTEXT = None


def get_context():
    if not LOGFORMAT_CONTEXT:
        set_context(FormatContext())

    return LOGFORMAT_CONTEXT


def set_context(context):
    global LOGFORMAT_CONTEXT

    LOGFORMAT_CONTEXT = context

    return context


def note(name, message, *a, **kw):
    return get_context().note(name, message, *a, **kw)


class FormatContext(object):
    def __init__(self, **kwargs):
        self.note_handlers = list(kwargs.pop('note_handlers', None) or [])
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))

    def note(self, name, message, *a, **kw):
        """An access log formatter sits on the request path and has no
        log of its own to complain to. This is a hook for recording
        the conditions that need to be surfaced without failing the
        request, such as a format string with a mistyped directive,
        or a sink that raised on write.
        """
        if not self.note_handlers:
            return
        if a:
            try:
                message = message % a
            except Exception:
                pass
        for nh in self.note_handlers:
            nh(name, message)
        return

    def __repr__(self):
        return '<%s note_handlers=%r>' % (self.__class__.__name__,
                                          self.note_handlers)
