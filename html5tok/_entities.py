"""Character reference decoding.

Decodes the text following an ``&`` into the characters it stands for,
reporting malformed references through the tokenizer's error callback.
Named references are matched longest-first against the HTML5 entity table.
"""
from ._inputstream import HTMLUnicodeInputStream
from ._trie import Trie
from .constants import (EOF, asciiAlphanumeric, digits, entities, hexDigits,
                        replacementCharacters)

entitiesTrie = Trie(entities)


def _isNoncharacter(codepoint):
    return 0xFDD0 <= codepoint <= 0xFDEF or (codepoint & 0xFFFE) == 0xFFFE


def _isControl(codepoint):
    return ((0x01 <= codepoint <= 0x1F and codepoint not in (0x09, 0x0A, 0x0C, 0x20)) or
            0x7F <= codepoint <= 0x9F)


class EntityDecoder(object):
    """Consumes character references from ``stream``.

    ``parseError`` is called as ``parseError(code, datavars=None)`` for each
    malformed reference; decoding always produces some text.
    """

    def __init__(self, stream, parseError):
        self.stream = stream
        self.parseError = parseError

    def consumeNumberEntity(self, isHex):
        """Consume the digits of a numeric reference and return its character.

        The stream is positioned after ``&#`` (and the ``x`` for hex), with
        at least one digit of the right kind following.
        """
        allowed = hexDigits if isHex else digits
        radix = 16 if isHex else 10

        charStack = []
        c = self.stream.char()
        while c is not EOF and c in allowed:
            charStack.append(c)
            c = self.stream.char()

        charAsInt = int("".join(charStack), radix)

        if charAsInt in replacementCharacters:
            char = replacementCharacters[charAsInt]
            self.parseError("illegal-windows-1252-entity",
                            {"charAsInt": charAsInt})
        elif charAsInt == 0:
            char = "\uFFFD"
            self.parseError("null-character-reference")
        elif ((0xD800 <= charAsInt <= 0xDFFF) or charAsInt > 0x10FFFF or
              _isNoncharacter(charAsInt)):
            char = "\uFFFD"
            self.parseError("illegal-codepoint-for-numeric-entity",
                            {"charAsInt": charAsInt})
        else:
            if _isControl(charAsInt) or charAsInt == 0x0D:
                self.parseError("control-character-reference",
                                {"charAsInt": charAsInt})
            char = chr(charAsInt)

        if c != ";":
            self.parseError("numeric-entity-without-semicolon")
            self.stream.unget(c)

        return char

    def consumeEntity(self, fromAttribute=False):
        """Consume a character reference and return the text it produces.

        The stream is positioned just after the ``&``. If no reference can
        be decoded the ``&`` and whatever was consumed are returned as
        literal text, so the result is never empty.

        In attribute values a named reference without ``;`` that is
        followed by an alphanumeric or ``=`` is left alone, so that
        ``?a=1&copy=2`` survives intact.
        """
        output = "&"

        charStack = [self.stream.char()]
        if charStack[0] is EOF or (charStack[0] not in asciiAlphanumeric and
                                   charStack[0] != "#"):
            self.stream.unget(charStack[0])

        elif charStack[0] == "#":
            # Read the next character to see if it's hex or decimal
            hex = False
            charStack.append(self.stream.char())
            if charStack[-1] in ("x", "X"):
                hex = True
                charStack.append(self.stream.char())

            # charStack[-1] should be the first digit
            if charStack[-1] is not EOF and ((hex and charStack[-1] in hexDigits) or
                                             (not hex and charStack[-1] in digits)):
                # At least one digit found, so consume the whole number
                self.stream.unget(charStack[-1])
                output = self.consumeNumberEntity(hex)
            else:
                # No digits found
                self.parseError("expected-numeric-entity")
                self.stream.unget(charStack.pop())
                output = "&" + "".join(charStack)

        else:
            # Consume characters while they could still begin an entity
            # name, then find the longest name that matched
            while charStack[-1] is not EOF:
                if not entitiesTrie.has_keys_with_prefix("".join(charStack)):
                    break
                charStack.append(self.stream.char())

            try:
                entityName = entitiesTrie.longest_prefix("".join(charStack[:-1]))
                entityLength = len(entityName)
            except KeyError:
                entityName = None

            if entityName is not None:
                nextChar = charStack[entityLength]
                if (entityName[-1] != ";" and fromAttribute and nextChar is not EOF and
                        (nextChar in asciiAlphanumeric or nextChar == "=")):
                    self.stream.unget(charStack.pop())
                    output = "&" + "".join(charStack)
                else:
                    if entityName[-1] != ";":
                        self.parseError("named-entity-without-semicolon")
                    output = entities[entityName]
                    self.stream.unget(charStack.pop())
                    output += "".join(charStack[entityLength:])
            else:
                self.stream.unget(charStack.pop())
                output = "&" + "".join(charStack)
                # Keep the rest of the alphanumeric run together with the
                # ampersand; only a following ';' makes it an error
                output += self.stream.charsUntil(asciiAlphanumeric, True)
                if self.stream.peek() == ";":
                    self.parseError("expected-named-entity")

        return output


def unescape(text, fromAttribute=False):
    """Replace the character references in ``text`` with the characters
    they stand for.

    Malformed references are decoded the way the tokenizer decodes them
    and are otherwise ignored. Newlines are normalized as in the tokenizer.

    >>> unescape("fish &amp; chips &#x41; &notit;")
    'fish & chips A ¬it;'
    """
    stream = HTMLUnicodeInputStream(text)
    decoder = EntityDecoder(stream, lambda code, datavars=None: None)

    rv = []
    while True:
        rv.append(stream.charsUntil(("&",)))
        if stream.char() is EOF:
            break
        rv.append(decoder.consumeEntity(fromAttribute))
    return "".join(rv)
