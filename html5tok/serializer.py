import re
from codecs import register_error, xmlcharrefreplace_errors
from xml.sax.saxutils import escape

from ._tokens import Characters, Comment, Doctype, EndOfInput, EndTag, StartTag
from .constants import (booleanAttributes, entities, rcdataElements,
                        scriptingRawtextElements, spaceCharacters,
                        voidElements)

spaceCharacters = "".join(spaceCharacters)

_quoteAttributeSpecChars = spaceCharacters + "\"'=<>`"
_quoteAttributeSpec = re.compile("[" + _quoteAttributeSpecChars + "]")
_quoteAttributeLegacy = re.compile("[" + _quoteAttributeSpecChars +
                                   "\x00\x01\x02\x03\x04\x05\x06\x07\x08\t\n"
                                   "\x0b\x0c\r\x0e\x0f\x10\x11\x12\x13\x14\x15"
                                   "\x16\x17\x18\x19\x1a\x1b\x1c\x1d\x1e\x1f"
                                   "\x20\x2f\x60\xa0\u1680\u180e\u180f\u2000"
                                   "\u2001\u2002\u2003\u2004\u2005\u2006\u2007"
                                   "\u2008\u2009\u200a\u2028\u2029\u202f\u205f"
                                   "\u3000]")


_encode_entity_map = {}
for k, v in entities.items():
    # skip multi-character entities
    if len(v) > 1 or v == "&":
        continue
    v = ord(v)
    if v not in _encode_entity_map or k.islower():
        # prefer &lt; over &LT; and similarly for &amp;, &gt;, etc.
        _encode_entity_map[v] = k


def htmlentityreplace_errors(exc):
    if isinstance(exc, (UnicodeEncodeError, UnicodeTranslateError)):
        res = []
        for c in exc.object[exc.start:exc.end]:
            e = _encode_entity_map.get(ord(c))
            if e:
                res.append("&")
                res.append(e)
                if not e.endswith(";"):
                    res.append(";")
            else:
                res.append("&#x%s;" % (hex(ord(c))[2:]))
        return ("".join(res), exc.end)
    else:
        return xmlcharrefreplace_errors(exc)


register_error("htmlentityreplace", htmlentityreplace_errors)


def serialize(tokens, encoding=None, **serializer_opts):
    """Serialize a sequence of tokens back into markup.

    :arg tokens: an iterable of tokens, for example from
        :func:`html5tok.tokenize`

    :arg encoding: if given, the result is bytes in this encoding;
        characters it cannot represent become character references

    :arg serializer_opts: any options :class:`HTMLSerializer` takes

    >>> from html5tok import tokenize
    >>> serialize(tokenize("<p class=a title='x y'>1 &lt; 2"))
    '<p class=a title="x y">1 &lt; 2'
    """
    s = HTMLSerializer(**serializer_opts)
    return s.render(tokens, encoding)


class HTMLSerializer(object):

    # attribute quoting options
    quote_attr_values = "legacy"  # be secure by default
    quote_char = '"'
    use_best_quote_char = True

    # tag syntax options
    minimize_boolean_attributes = True
    use_trailing_solidus = False
    space_before_trailing_solidus = True

    # escaping options
    escape_lt_in_attrs = False
    escape_rcdata = False

    # miscellaneous options
    alphabetical_attributes = False
    scripting = False
    strict = False

    options = ("quote_attr_values", "quote_char", "use_best_quote_char",
               "minimize_boolean_attributes", "use_trailing_solidus",
               "space_before_trailing_solidus", "escape_lt_in_attrs",
               "escape_rcdata", "alphabetical_attributes", "scripting",
               "strict")

    def __init__(self, **kwargs):
        """Initialize HTMLSerializer

        :arg quote_attr_values: Whether to quote attribute values that don't
            require quoting per legacy browser behavior (``"legacy"``), when
            required by the standard (``"spec"``), or always (``"always"``).

            Defaults to ``"legacy"``.

        :arg quote_char: Use given quote character for attribute quoting.

            Defaults to ``"`` which will use double quotes unless attribute
            value contains a double quote, in which case single quotes are
            used.

        :arg escape_lt_in_attrs: Whether or not to escape ``<`` and ``>`` in
            attribute values.

            Defaults to ``False``.

        :arg escape_rcdata: Whether to escape characters that need to be
            escaped within normal elements within rcdata elements such as
            style.

            Defaults to ``False``.

        :arg minimize_boolean_attributes: Shortens boolean attributes to give
            just the attribute value, for example::

              <input disabled="disabled">

            becomes::

              <input disabled>

            Defaults to ``True``.

        :arg use_trailing_solidus: Includes a close-tag slash at the end of the
            start tag of void elements (empty elements whose end tag is
            forbidden). E.g. ``<hr/>``. Start tags that were read with a
            self-closing flag always get one.

            Defaults to ``False``.

        :arg space_before_trailing_solidus: Places a space immediately before
            the closing slash in a tag using a trailing solidus. E.g.
            ``<hr />``. Requires ``use_trailing_solidus=True``.

            Defaults to ``True``.

        :arg alphabetical_attributes: Reorder attributes to be in alphabetical
            order.

            Defaults to ``False``.

        :arg scripting: Write noscript content unescaped, matching a
            tokenizer run with scripting enabled.

            Defaults to ``False``.

        :arg strict: Raise :class:`SerializeError` on the first problem
            instead of collecting problems in ``errors``.

            Defaults to ``False``.

        """
        unexpected_args = frozenset(kwargs) - frozenset(self.options)
        if len(unexpected_args) > 0:
            raise ValueError("Unknown serializer option(s): %s" %
                             ", ".join(sorted(unexpected_args)))
        if 'quote_char' in kwargs:
            self.use_best_quote_char = False
        for attr in self.options:
            setattr(self, attr, kwargs.get(attr, getattr(self, attr)))
        if self.quote_attr_values not in ("legacy", "spec", "always"):
            raise ValueError("quote_attr_values must be one of: "
                             "'always', 'spec', or 'legacy'")
        self.errors = []

    def encode(self, string):
        assert isinstance(string, str)
        if self.encoding:
            return string.encode(self.encoding, "htmlentityreplace")
        else:
            return string

    def encodeStrict(self, string):
        assert isinstance(string, str)
        if self.encoding:
            return string.encode(self.encoding, "strict")
        else:
            return string

    def serialize(self, tokens, encoding=None):
        # pylint:disable=too-many-nested-blocks
        self.encoding = encoding
        in_cdata = False
        self.errors = []
        cdataElements = rcdataElements
        if self.scripting:
            cdataElements = cdataElements | frozenset(scriptingRawtextElements)

        if self.alphabetical_attributes:
            from .filters.alphabeticalattributes import Filter
            tokens = Filter(tokens)

        for token in tokens:
            if isinstance(token, Doctype):
                yield self.encodeStrict(self.serializeDoctype(token))

            elif isinstance(token, Characters):
                if in_cdata:
                    if token.data.find("</") >= 0:
                        self.serializeError("Unexpected </ in CDATA")
                    yield self.encode(token.data)
                else:
                    yield self.encode(escape(token.data, {"\xa0": "&nbsp;"}))

            elif isinstance(token, StartTag):
                name = token.name
                yield self.encodeStrict("<%s" % name)
                if name in cdataElements and not self.escape_rcdata:
                    in_cdata = True
                elif in_cdata:
                    self.serializeError("Unexpected child element of a CDATA element")
                for k, v in token.attributes.items():
                    yield self.encodeStrict(' ')

                    yield self.encodeStrict(k)
                    if not self.minimize_boolean_attributes or \
                        (k not in booleanAttributes.get(name, tuple()) and
                         k not in booleanAttributes.get("", tuple())):
                        yield self.encodeStrict("=")
                        if self.quote_attr_values == "always" or len(v) == 0:
                            quote_attr = True
                        elif self.quote_attr_values == "spec":
                            quote_attr = _quoteAttributeSpec.search(v) is not None
                        elif self.quote_attr_values == "legacy":
                            quote_attr = _quoteAttributeLegacy.search(v) is not None
                        else:
                            raise ValueError("quote_attr_values must be one of: "
                                             "'always', 'spec', or 'legacy'")
                        v = v.replace("&", "&amp;").replace("\xa0", "&nbsp;")
                        if self.escape_lt_in_attrs:
                            v = v.replace("<", "&lt;").replace(">", "&gt;")
                        if quote_attr:
                            quote_char = self.quote_char
                            if self.use_best_quote_char:
                                if "'" in v and '"' not in v:
                                    quote_char = '"'
                                elif '"' in v and "'" not in v:
                                    quote_char = "'"
                            if quote_char == "'":
                                v = v.replace("'", "&#39;")
                            else:
                                v = v.replace('"', "&quot;")
                            yield self.encodeStrict(quote_char)
                            yield self.encode(v)
                            yield self.encodeStrict(quote_char)
                        else:
                            yield self.encode(v)
                if token.self_closing or (name in voidElements and self.use_trailing_solidus):
                    if self.space_before_trailing_solidus:
                        yield self.encodeStrict(" /")
                    else:
                        yield self.encodeStrict("/")
                yield self.encode(">")

            elif isinstance(token, EndTag):
                name = token.name
                if name in cdataElements:
                    in_cdata = False
                elif in_cdata:
                    self.serializeError("Unexpected child element of a CDATA element")
                yield self.encodeStrict("</%s>" % name)

            elif isinstance(token, Comment):
                data = token.data
                if data.find("--") >= 0:
                    self.serializeError("Comment contains --")
                yield self.encodeStrict("<!--%s-->" % data)

            elif isinstance(token, EndOfInput):
                break

            else:
                self.serializeError("Unknown token: %r" % (token,))

    def serializeDoctype(self, token):
        if token.name:
            doctype = "<!DOCTYPE %s" % token.name
        else:
            doctype = "<!DOCTYPE"

        if token.public_id is not None:
            doctype += ' PUBLIC "%s"' % token.public_id
        elif token.system_id is not None:
            doctype += " SYSTEM"
        if token.system_id is not None:
            if token.system_id.find('"') >= 0:
                if token.system_id.find("'") >= 0:
                    self.serializeError("System identifer contains both single and double quote characters")
                quote_char = "'"
            else:
                quote_char = '"'
            doctype += " %s%s%s" % (quote_char, token.system_id, quote_char)

        doctype += ">"
        return doctype

    def render(self, tokens, encoding=None):
        """Serializes the token stream into a string

        :arg tokens: an iterable of tokens

        :arg encoding: the string encoding to use

        :returns: the serialized markup, bytes if an encoding was given

        Example:

        >>> from html5tok import tokenize
        >>> s = HTMLSerializer(quote_attr_values="always")
        >>> s.render(tokenize("<a href=/>x</a>"))
        '<a href="/">x</a>'

        """
        if encoding:
            return b"".join(list(self.serialize(tokens, encoding)))
        else:
            return "".join(list(self.serialize(tokens)))

    def serializeError(self, data="XXX ERROR MESSAGE NEEDED"):
        # XXX The idea is to make data mandatory.
        self.errors.append(data)
        if self.strict:
            raise SerializeError(data)


class SerializeError(Exception):
    """Error in serialized tree"""
    pass
