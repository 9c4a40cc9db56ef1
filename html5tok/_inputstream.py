import re
from io import BytesIO, StringIO

import webencodings

from .constants import EOF

invalid_unicode_no_surrogate = (
    "[\u0001-\u0008\u000B\u000E-\u001F\u007F-\u009F\uFDD0-\uFDEF\uFFFE\uFFFF"
    "\U0001FFFE\U0001FFFF\U0002FFFE\U0002FFFF\U0003FFFE\U0003FFFF"
    "\U0004FFFE\U0004FFFF\U0005FFFE\U0005FFFF\U0006FFFE\U0006FFFF"
    "\U0007FFFE\U0007FFFF\U0008FFFE\U0008FFFF\U0009FFFE\U0009FFFF"
    "\U000AFFFE\U000AFFFF\U000BFFFE\U000BFFFF\U000CFFFE\U000CFFFF"
    "\U000DFFFE\U000DFFFF\U000EFFFE\U000EFFFF\U000FFFFE\U000FFFFF"
    "\U0010FFFE\U0010FFFF]")

invalid_unicode_re = re.compile(invalid_unicode_no_surrogate[:-1] + "\uD800-\uDFFF]")

surrogate_re = re.compile("[\uD800-\uDFFF]")

# Cache for charsUntil()
charsUntilRegEx = {}


def HTMLInputStream(source, encoding=None):
    """Return the stream class appropriate to ``source``.

    Text (a ``str`` or a file object whose ``read`` returns ``str``) gives an
    :class:`HTMLUnicodeInputStream`; anything else is treated as bytes and
    gives an :class:`HTMLBinaryInputStream`.
    """
    if hasattr(source, "read"):
        isUnicode = isinstance(source.read(0), str)
    else:
        isUnicode = isinstance(source, str)

    if isUnicode:
        if encoding is not None:
            raise TypeError("Cannot set an encoding with a unicode input, set %r" % (encoding,))
        return HTMLUnicodeInputStream(source)
    else:
        return HTMLBinaryInputStream(source, encoding)


class HTMLUnicodeInputStream(object):
    """Provides a unicode stream of characters to the HTMLTokenizer.

    The stream is read in chunks. Only the unconsumed part of the input and
    the last consumed character are held in memory, so that a single
    character can always be pushed back with :meth:`unget`.

    Newlines are normalized (CR LF and lone CR become LF), lone surrogates
    are replaced with U+FFFD, and invalid code points are reported in
    :attr:`errors` as ``(code, (line, col), offset)`` tuples.
    """

    _defaultChunkSize = 10240

    def __init__(self, source):
        self.dataStream = self.openStream(source)
        self.charEncoding = ("utf-8", "certain")
        self.reset()

    def reset(self):
        self.chunk = ""
        self.chunkSize = 0
        self.chunkOffset = 0
        self.errors = []

        # Characters discarded from the front of the chunk
        self.prevOffset = 0
        # number of (complete) lines in discarded characters
        self.prevNumLines = 0
        # number of columns in the last line of the discarded characters
        self.prevNumCols = 0

        self._exhausted = False

    def openStream(self, source):
        """Produces a file object from source.

        source can be either a file object or a string.
        """
        if hasattr(source, "read"):
            return source
        return StringIO(source)

    def _position(self, offset, chunk=None):
        if chunk is None:
            chunk = self.chunk
        nLines = chunk.count("\n", 0, offset)
        positionLine = self.prevNumLines + nLines
        lastLinePos = chunk.rfind("\n", 0, offset)
        if lastLinePos == -1:
            positionColumn = self.prevNumCols + offset
        else:
            positionColumn = offset - (lastLinePos + 1)
        return (positionLine, positionColumn)

    def position(self):
        """Returns (line, col) of the current position in the stream."""
        line, col = self._position(self.chunkOffset)
        return (line + 1, col)

    def offset(self):
        """Returns the number of characters consumed so far."""
        return self.prevOffset + self.chunkOffset

    def char(self):
        """Read one character from the stream. Return EOF when EOF is reached."""
        if self.chunkOffset >= self.chunkSize:
            if not self.readChunk():
                return EOF

        chunkOffset = self.chunkOffset
        char = self.chunk[chunkOffset]
        self.chunkOffset = chunkOffset + 1

        return char

    def peek(self, n=1):
        """Return up to ``n`` upcoming characters without consuming them.

        Fewer characters are returned near the end of the stream, and the
        empty string at EOF.
        """
        while self.chunkSize - self.chunkOffset < n:
            if not self.readChunk():
                break
        return self.chunk[self.chunkOffset:self.chunkOffset + n]

    def matchAhead(self, string, caseInsensitive=False):
        """Consume ``string`` if the stream continues with it.

        Returns True and advances past the match, or False leaving the
        stream untouched.
        """
        ahead = self.peek(len(string))
        if caseInsensitive:
            matched = ahead.lower() == string.lower()
        else:
            matched = ahead == string
        if matched:
            self.chunkOffset += len(string)
        return matched

    def _discard(self):
        # Drop everything but the last consumed character
        keep = self.chunkOffset - 1
        if keep <= 0:
            return
        self.prevNumLines, self.prevNumCols = self._position(keep)
        self.prevOffset += keep
        self.chunk = self.chunk[keep:]
        self.chunkSize -= keep
        self.chunkOffset -= keep

    def readChunk(self, chunkSize=None):
        """Append the next chunk of data to the unconsumed input.

        Returns False if the underlying stream has no more data.
        """
        if self._exhausted:
            return False
        if chunkSize is None:
            chunkSize = self._defaultChunkSize

        self._discard()

        data = self.dataStream.read(chunkSize)

        if not data:
            # We have no more data, bye-bye stream
            self._exhausted = True
            return False

        # Deal with CR LF broken across chunks; a read may return a lone CR
        while data[-1] == "\r":
            more = self.dataStream.read(chunkSize)
            if not more:
                break
            data += more

        data = data.replace("\r\n", "\n")
        data = data.replace("\r", "\n")

        self.reportCharacterErrors(data)

        # Replace lone surrogates
        # Note U+0000 is dealt with in the tokenizer
        data = surrogate_re.sub("\uFFFD", data)

        self.chunk += data
        self.chunkSize = len(self.chunk)

        return True

    def reportCharacterErrors(self, data):
        if invalid_unicode_re.search(data) is None:
            return
        text = self.chunk + data
        for match in invalid_unicode_re.finditer(data):
            # Positions point just past the offending character, like the
            # positions of tokenizer errors
            offset = self.chunkSize + match.end()
            line, col = self._position(offset, text)
            self.errors.append(("invalid-codepoint", (line + 1, col),
                                self.prevOffset + offset))

    def charsUntil(self, characters, opposite=False):
        """ Returns a string of characters from the stream up to but not
        including any character in 'characters' or EOF. 'characters' must be
        a container that supports the 'in' method and iteration over its
        characters.
        """

        # Use a cache of regexps to find the required characters
        try:
            chars = charsUntilRegEx[(characters, opposite)]
        except KeyError:
            if __debug__:
                for c in characters:
                    assert(ord(c) < 128)
            regex = "".join(["\\x%02x" % ord(c) for c in characters])
            if not opposite:
                regex = "^%s" % regex
            chars = charsUntilRegEx[(characters, opposite)] = re.compile("[%s]+" % regex)

        rv = []

        while True:
            # Find the longest matching prefix
            m = chars.match(self.chunk, self.chunkOffset)
            if m is None:
                # If nothing matched, and it wasn't because we ran out of chunk,
                # then stop
                if self.chunkOffset != self.chunkSize:
                    break
            else:
                end = m.end()
                # If not the whole chunk matched, return everything
                # up to the part that didn't match
                if end != self.chunkSize:
                    rv.append(self.chunk[self.chunkOffset:end])
                    self.chunkOffset = end
                    break
            # If the whole remainder of the chunk matched,
            # use it all and read the next chunk
            rv.append(self.chunk[self.chunkOffset:])
            self.chunkOffset = self.chunkSize
            if not self.readChunk():
                # Reached EOF
                break

        r = "".join(rv)
        return r

    def unget(self, char):
        # Only one character is allowed to be ungotten at once - it must
        # be consumed again before any further call to unget
        if char is not EOF:
            self.chunkOffset -= 1
            assert self.chunk[self.chunkOffset] == char


class HTMLBinaryInputStream(HTMLUnicodeInputStream):
    """Provides a unicode stream of characters decoded from bytes.

    The transport encoding is given by the caller (UTF-8 when omitted); a
    byte order mark at the start of the stream overrides it. No further
    encoding sniffing is done.
    """

    def __init__(self, source, encoding=None):
        self.rawStream = self.openStream(source)

        if encoding is None:
            encoding = "utf-8"
        fallback = lookupEncoding(encoding)
        if fallback is None:
            raise LookupError("Unknown encoding: %r" % (encoding,))

        self.charEncoding = (fallback, "certain")
        self.reset()

    def reset(self):
        self.dataStream = _DecodingStream(self.rawStream, self.charEncoding[0])
        HTMLUnicodeInputStream.reset(self)

    def openStream(self, source):
        """Produces a file object from source.

        source can be either a file object or a byte string.
        """
        if hasattr(source, "read"):
            return source
        return BytesIO(source)

    def readChunk(self, chunkSize=None):
        rv = HTMLUnicodeInputStream.readChunk(self, chunkSize)
        if self.dataStream.encoding is not None:
            self.charEncoding = (self.dataStream.encoding, "certain")
        return rv


class _DecodingStream(object):
    """File-like wrapper returning text decoded from a byte stream."""

    def __init__(self, rawStream, fallbackEncoding):
        self.rawStream = rawStream
        self.decoder = webencodings.IncrementalDecoder(fallbackEncoding, errors="replace")
        self.finished = False

    @property
    def encoding(self):
        return self.decoder.encoding

    def read(self, size):
        rv = ""
        while not rv and not self.finished:
            data = self.rawStream.read(size)
            if not data:
                self.finished = True
                rv = self.decoder.decode(b"", final=True)
            else:
                rv = self.decoder.decode(data)
        return rv


def lookupEncoding(encoding):
    """Return the python codec name corresponding to an encoding or None if the
    string doesn't correspond to a valid encoding."""
    if isinstance(encoding, bytes):
        try:
            encoding = encoding.decode("ascii")
        except UnicodeDecodeError:
            return None

    if encoding is not None:
        try:
            return webencodings.lookup(encoding)
        except AttributeError:
            return None
    else:
        return None
