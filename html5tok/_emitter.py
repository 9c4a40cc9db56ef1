"""Incremental construction of tokens.

The state machine never builds tokens itself. It opens a token of some
kind, feeds characters into whichever field is currently being read and
finally asks for the finished token. Character data is buffered so that
runs of text come out as a single :class:`Characters` token.
"""
from collections import deque

from ._tokens import Characters, Comment, Doctype, EndTag, StartTag
from .constants import asciiUpper2Lower


class PendingToken(object):
    """A token under construction.

    ``field`` names the attribute that :meth:`TokenEmitter.append_char`
    currently writes to.
    """
    __slots__ = ("kind", "field", "name", "attributes", "selfClosing",
                 "attributeName", "attributeValue", "duplicate", "data",
                 "publicId", "systemId", "forceQuirks")

    def __init__(self, kind):
        self.kind = kind
        self.field = None
        self.name = None
        self.attributes = {}
        self.selfClosing = False
        self.attributeName = None
        self.attributeValue = None
        self.duplicate = False
        self.data = ""
        self.publicId = None
        self.systemId = None
        self.forceQuirks = False


# Fields whose characters are folded to ASCII lowercase as they arrive
_lowercaseFields = frozenset(("name", "attributeName"))


class TokenEmitter(object):
    """Builds tokens for the tokenizer and queues them for delivery.

    ``parseError`` is called as ``parseError(code, datavars=None)`` for
    errors that only become visible while assembling a token, such as a
    duplicate attribute or attributes on an end tag.
    """

    def __init__(self, parseError):
        self.parseError = parseError
        self.tokenQueue = deque()
        self.pending = None
        self._text = []

    # Starting tokens

    def start_tag(self, kind, name=""):
        """Open a :class:`StartTag` or :class:`EndTag` named ``name``."""
        self.pending = PendingToken(kind)
        self.pending.name = ""
        self.pending.field = "name"
        if name:
            self.append_char(name)

    def start_comment(self, data=""):
        self.pending = PendingToken(Comment)
        self.pending.field = "data"
        self.pending.data = data

    def start_doctype(self):
        self.pending = PendingToken(Doctype)
        self.pending.field = "name"

    # Filling in fields

    def append_char(self, data):
        """Append ``data`` to the field currently being read.

        Tag, attribute and DOCTYPE names are lowercased (ASCII only).
        """
        pending = self.pending
        field = pending.field
        if field is None:
            return
        if field in _lowercaseFields:
            data = data.translate(asciiUpper2Lower)
        setattr(pending, field, (getattr(pending, field) or "") + data)

    def start_attribute(self):
        """Begin a new attribute, committing the previous one if any."""
        self.finish_attribute()
        pending = self.pending
        pending.attributeName = ""
        pending.attributeValue = ""
        pending.duplicate = False
        pending.field = "attributeName"

    def finish_attribute_name(self):
        """Mark the end of an attribute name.

        A name already present on the tag is reported here, and the value
        that follows it is read but dropped: the first occurrence wins.
        """
        pending = self.pending
        if pending.attributeName in pending.attributes:
            self.parseError("duplicate-attribute", {"name": pending.attributeName})
            pending.duplicate = True
        pending.field = None

    def start_attribute_value(self):
        self.pending.field = "attributeValue"

    def finish_attribute(self):
        pending = self.pending
        if pending.attributeName is None:
            return
        if not pending.duplicate and pending.attributeName not in pending.attributes:
            pending.attributes[pending.attributeName] = pending.attributeValue
        pending.attributeName = None
        pending.attributeValue = None
        pending.duplicate = False
        pending.field = None

    def set_self_closing(self):
        self.pending.selfClosing = True

    def stop_doctype_name(self):
        self.pending.field = None

    def start_public_identifier(self):
        self.pending.publicId = ""
        self.pending.field = "publicId"

    def start_system_identifier(self):
        self.pending.systemId = ""
        self.pending.field = "systemId"

    def set_force_quirks(self):
        self.pending.forceQuirks = True

    # Finishing tokens

    def finalize(self):
        """Return the pending token as a token object and forget it."""
        pending = self.pending
        kind = pending.kind
        if kind is StartTag or kind is EndTag:
            self.finish_attribute()
        self.pending = None

        if kind is StartTag or kind is EndTag:
            if kind is EndTag:
                if pending.attributes:
                    self.parseError("attributes-in-end-tag")
                if pending.selfClosing:
                    self.parseError("self-closing-flag-on-end-tag")
            return kind(pending.name, pending.attributes, pending.selfClosing)
        elif kind is Comment:
            return Comment(pending.data)
        else:
            assert kind is Doctype
            return Doctype(pending.name, pending.publicId, pending.systemId,
                           pending.forceQuirks)

    def emit_characters(self, data):
        """Buffer character data; adjacent runs are merged."""
        if data:
            self._text.append(data)

    def flush_characters(self):
        if self._text:
            self.tokenQueue.append(Characters("".join(self._text)))
            self._text = []

    def emit(self, token):
        """Queue ``token`` after any buffered character data."""
        self.flush_characters()
        self.tokenQueue.append(token)
