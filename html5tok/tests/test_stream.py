from io import BytesIO, StringIO

import pytest

from html5tok._inputstream import (HTMLBinaryInputStream, HTMLInputStream,
                                   HTMLUnicodeInputStream, lookupEncoding)


class HTMLUnicodeInputStreamShortChunk(HTMLUnicodeInputStream):
    _defaultChunkSize = 2


class HTMLUnicodeInputStreamOneChar(HTMLUnicodeInputStream):
    _defaultChunkSize = 1


class HTMLBinaryInputStreamShortChunk(HTMLBinaryInputStream):
    _defaultChunkSize = 2


def readAll(stream):
    rv = []
    c = stream.char()
    while c is not None:
        rv.append(c)
        c = stream.char()
    return "".join(rv)


def test_char_ascii():
    stream = HTMLInputStream("'")
    assert stream.charEncoding[0] == "utf-8"
    assert stream.char() == "'"


def test_char_utf8():
    stream = HTMLInputStream("\u2018".encode("utf-8"))
    assert stream.charEncoding[0].name == "utf-8"
    assert stream.char() == "\u2018"


def test_char_win1252():
    stream = HTMLInputStream("\xa9\xf1\u2019".encode("windows-1252"), encoding="windows-1252")
    assert stream.charEncoding[0].name == "windows-1252"
    assert stream.char() == "\xa9"
    assert stream.char() == "\xf1"
    assert stream.char() == "\u2019"


def test_label_is_resolved():
    stream = HTMLInputStream(b"caf\xe9", encoding="latin1")
    assert stream.charEncoding[0].name == "windows-1252"
    assert readAll(stream) == "caf\xe9"


def test_bom():
    stream = HTMLInputStream(b"\xef\xbb\xbf" + b"'")
    assert stream.char() == "'"
    assert stream.charEncoding[0].name == "utf-8"


def test_bom_overrides_given_encoding():
    stream = HTMLInputStream(b"\xef\xbb\xbfcaf\xc3\xa9", encoding="windows-1252")
    assert stream.charEncoding[0].name == "windows-1252"
    assert readAll(stream) == "caf\xe9"
    assert stream.charEncoding[0].name == "utf-8"


def test_utf16_bom():
    stream = HTMLInputStream("\uFEFFab".encode("utf-16-le"))
    assert readAll(stream) == "ab"
    assert stream.charEncoding[0].name == "utf-16le"


def test_undecodable_bytes():
    stream = HTMLInputStream(b"a\xffb")
    assert readAll(stream) == "a\uFFFDb"
    assert stream.errors == []


def test_unknown_encoding():
    with pytest.raises(LookupError):
        HTMLInputStream(b"", encoding="no-such-encoding")


def test_encoding_with_text():
    with pytest.raises(TypeError):
        HTMLInputStream("", encoding="utf-8")


@pytest.mark.parametrize("source, expected", [
    ("abc", HTMLUnicodeInputStream),
    (StringIO("abc"), HTMLUnicodeInputStream),
    (b"abc", HTMLBinaryInputStream),
    (BytesIO(b"abc"), HTMLBinaryInputStream),
])
def test_stream_type(source, expected):
    stream = HTMLInputStream(source)
    assert type(stream) is expected
    assert readAll(stream) == "abc"


def test_lookupEncoding():
    assert lookupEncoding("UTF-8").name == "utf-8"
    assert lookupEncoding(b"utf8").name == "utf-8"
    assert lookupEncoding("iso-8859-1").name == "windows-1252"
    assert lookupEncoding("not-an-encoding") is None
    assert lookupEncoding(b"\xff") is None
    assert lookupEncoding(None) is None


def test_newlines():
    stream = HTMLUnicodeInputStream("a\r\nb\rc\n\r\nd")
    assert readAll(stream) == "a\nb\nc\n\nd"


@pytest.mark.parametrize("cls", [HTMLUnicodeInputStream, HTMLUnicodeInputStreamShortChunk,
                                 HTMLUnicodeInputStreamOneChar])
def test_newlines_across_chunks(cls):
    stream = cls("a\r\nb\r\n\r\nc\r")
    assert readAll(stream) == "a\nb\n\nc\n"


def test_newlines_binary_short_chunks():
    stream = HTMLBinaryInputStreamShortChunk(b"a\r\nb\rc")
    assert readAll(stream) == "a\nb\nc"


class OneCharReader(StringIO):
    def read(self, size=-1):
        return StringIO.read(self, 1)


def test_newlines_with_one_char_reads():
    stream = HTMLInputStream(OneCharReader("a\r\nb\r\r\nc\r"))
    assert readAll(stream) == "a\nb\n\nc\n"
    assert stream.offset() == 6


def test_lone_cr_read_at_end():
    stream = HTMLUnicodeInputStreamOneChar("\r")
    assert stream.char() == "\n"
    assert stream.char() is None


def test_char_after_eof():
    stream = HTMLUnicodeInputStream("a")
    assert stream.char() == "a"
    assert stream.char() is None
    assert stream.char() is None


def test_unget():
    stream = HTMLUnicodeInputStream("ab")
    c = stream.char()
    stream.unget(c)
    assert stream.char() == "a"
    assert stream.char() == "b"
    stream.unget(None)
    assert stream.char() is None


def test_unget_across_chunks():
    stream = HTMLUnicodeInputStreamShortChunk("abcde")
    assert stream.char() == "a"
    assert stream.char() == "b"
    c = stream.char()
    assert c == "c"
    stream.unget(c)
    assert readAll(stream) == "cde"


def test_peek():
    stream = HTMLUnicodeInputStreamShortChunk("abc")
    assert stream.peek() == "a"
    assert stream.peek(3) == "abc"
    assert stream.peek(10) == "abc"
    assert stream.char() == "a"
    assert stream.peek(2) == "bc"
    readAll(stream)
    assert stream.peek() == ""


def test_matchAhead():
    stream = HTMLUnicodeInputStreamShortChunk("<!DocType html>")
    assert stream.char() == "<"
    assert stream.char() == "!"
    assert not stream.matchAhead("--")
    assert not stream.matchAhead("DOCTYPE")
    assert stream.matchAhead("doctype", caseInsensitive=True)
    assert stream.char() == " "
    assert not stream.matchAhead("html>x")
    assert stream.matchAhead("html>")
    assert stream.char() is None


def test_charsUntil():
    stream = HTMLUnicodeInputStream("abc<d")
    assert stream.charsUntil("<") == "abc"
    assert stream.charsUntil("<") == ""
    assert stream.char() == "<"
    assert stream.charsUntil("<") == "d"
    assert stream.char() is None


def test_charsUntil_opposite():
    stream = HTMLUnicodeInputStream("   \tx")
    assert stream.charsUntil(frozenset(" \t"), True) == "   \t"
    assert stream.char() == "x"


def test_charsUntil_across_chunks():
    stream = HTMLUnicodeInputStreamShortChunk("abcdefg<h")
    assert stream.charsUntil(("<", "&")) == "abcdefg"
    assert stream.char() == "<"


def test_position():
    stream = HTMLUnicodeInputStreamShortChunk("a\nbb\n\nccc\nddde\nf\ngh")
    assert stream.position() == (1, 0)
    assert stream.charsUntil("\n") == "a"
    assert stream.position() == (1, 1)
    stream.char()
    assert stream.position() == (2, 0)
    assert stream.charsUntil("\n") == "bb"
    assert stream.position() == (2, 2)
    stream.char()
    assert stream.position() == (3, 0)
    stream.char()
    assert stream.position() == (4, 0)
    assert stream.charsUntil("\n") == "ccc"
    assert stream.position() == (4, 3)
    stream.char()
    assert stream.position() == (5, 0)
    assert stream.charsUntil("e") == "ddd"
    assert stream.position() == (5, 3)
    stream.char()
    assert stream.position() == (5, 4)
    readAll(stream)
    assert stream.position() == (7, 2)


def test_offset():
    stream = HTMLUnicodeInputStreamShortChunk("ab\r\ncdef")
    assert stream.offset() == 0
    stream.char()
    assert stream.offset() == 1
    readAll(stream)
    # CR LF counts as one character
    assert stream.offset() == 7


def test_invalid_codepoint():
    stream = HTMLUnicodeInputStream("a\u0001b")
    assert readAll(stream) == "a\u0001b"
    assert stream.errors == [("invalid-codepoint", (1, 2), 2)]


def test_invalid_codepoint_on_later_line():
    stream = HTMLUnicodeInputStreamShortChunk("ab\ncd\uFFFE")
    readAll(stream)
    assert stream.errors == [("invalid-codepoint", (2, 3), 6)]


def test_lone_surrogate():
    stream = HTMLUnicodeInputStream("a\ud800b")
    assert readAll(stream) == "a\uFFFDb"
    assert [code for code, _, _ in stream.errors] == ["invalid-codepoint"]


def test_null_is_passed_through():
    stream = HTMLUnicodeInputStream("a\u0000b")
    assert readAll(stream) == "a\u0000b"
    assert stream.errors == []
