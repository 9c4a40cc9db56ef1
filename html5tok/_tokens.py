"""Token and parse error types produced by the tokenizer.

Tokens are plain value objects. Each one owns its fields, attributes
included, and the tokenizer never changes a token after handing it out, so
callers and filters are free to keep or modify what they receive. Two
tokens compare equal when they are of the same type and all of their fields
are equal.
"""
from .constants import E


class Token(object):
    __slots__ = ()
    fields = ()

    def _fields(self):
        return tuple(getattr(self, name) for name in self.fields)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()

    def __ne__(self, other):
        rv = self.__eq__(other)
        if rv is NotImplemented:
            return rv
        return not rv

    __hash__ = None

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__,
                            " ".join("%s=%r" % (name, getattr(self, name))
                                     for name in self.fields))


class Tag(Token):
    __slots__ = ("name", "attributes", "self_closing")
    fields = __slots__

    def __init__(self, name, attributes=None, self_closing=False):
        self.name = name
        # Ordered by first occurrence; names are unique
        self.attributes = dict(attributes or ())
        self.self_closing = self_closing


class StartTag(Tag):
    __slots__ = ()


class EndTag(Tag):
    __slots__ = ()


class Characters(Token):
    __slots__ = ("data",)
    fields = __slots__

    def __init__(self, data):
        self.data = data


class Comment(Token):
    __slots__ = ("data",)
    fields = __slots__

    def __init__(self, data):
        self.data = data


class Doctype(Token):
    """A DOCTYPE token.

    ``name``, ``public_id`` and ``system_id`` are ``None`` when missing,
    which is distinct from present but empty.
    """
    __slots__ = ("name", "public_id", "system_id", "force_quirks")
    fields = __slots__

    def __init__(self, name=None, public_id=None, system_id=None, force_quirks=False):
        self.name = name
        self.public_id = public_id
        self.system_id = system_id
        self.force_quirks = force_quirks


class EndOfInput(Token):
    """Returned once the input is exhausted, and on every call after that."""
    __slots__ = ()


class ParseError(object):
    """A recoverable error found while tokenizing.

    ``position`` is a ``(line, col)`` pair with 1-based lines and 0-based
    columns, and ``offset`` counts characters from the start of the input.
    Both point just past the character where the error was noticed.
    """
    __slots__ = ("code", "position", "offset", "datavars")

    def __init__(self, code, position, offset, datavars=None):
        self.code = code
        self.position = position
        self.offset = offset
        self.datavars = datavars or {}

    @property
    def message(self):
        return E.get(self.code, self.code) % self.datavars

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return ((self.code, self.position, self.offset, self.datavars) ==
                (other.code, other.position, other.offset, other.datavars))

    def __ne__(self, other):
        rv = self.__eq__(other)
        if rv is NotImplemented:
            return rv
        return not rv

    __hash__ = None

    def __str__(self):
        line, col = self.position
        return "Line: %i Col: %i %s" % (line, col, self.message)

    def __repr__(self):
        return "<ParseError %s at %r>" % (self.code, self.position)
