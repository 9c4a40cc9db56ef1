import pytest
from mock import Mock

from html5tok._entities import EntityDecoder, entitiesTrie, unescape
from html5tok._inputstream import HTMLUnicodeInputStream


def consume(text, fromAttribute=False):
    """Decode the reference at the start of ``text`` (the part after ``&``).

    Returns the decoded text, what is left of the input and the error
    callback."""
    stream = HTMLUnicodeInputStream(text)
    parseError = Mock()
    rv = EntityDecoder(stream, parseError).consumeEntity(fromAttribute)
    return rv, stream.peek(len(text) + 1), parseError


@pytest.mark.parametrize("text, output, rest", [
    ("amp;x", "&", "x"),
    ("lt;", "<", ""),
    ("notin;", "\u2209", ""),
    ("NotEqualTilde;", "\u2242\u0338", ""),
    ("#65;", "A", ""),
    ("#x41;b", "A", "b"),
    ("#X41;", "A", ""),
    ("#x1F600;", "\U0001F600", ""),
])
def test_well_formed(text, output, rest):
    rv, remaining, parseError = consume(text)
    assert rv == output
    assert remaining == rest
    assert not parseError.called


def test_named_without_semicolon():
    rv, rest, parseError = consume("amp x")
    assert (rv, rest) == ("&", " x")
    parseError.assert_called_once_with("named-entity-without-semicolon")


def test_longest_match():
    rv, rest, parseError = consume("notit;")
    assert (rv, rest) == ("\xaci", "t;")
    parseError.assert_called_once_with("named-entity-without-semicolon")


def test_numeric_without_semicolon():
    rv, rest, parseError = consume("#65x")
    assert (rv, rest) == ("A", "x")
    parseError.assert_called_once_with("numeric-entity-without-semicolon")


@pytest.mark.parametrize("text, output, code, value", [
    ("#x80;", "\u20AC", "illegal-windows-1252-entity", 0x80),
    ("#150;", "\u2013", "illegal-windows-1252-entity", 150),
    ("#xD800;", "\uFFFD", "illegal-codepoint-for-numeric-entity", 0xD800),
    ("#x110000;", "\uFFFD", "illegal-codepoint-for-numeric-entity", 0x110000),
    ("#xFFFE;", "\uFFFD", "illegal-codepoint-for-numeric-entity", 0xFFFE),
    ("#xFDD0;", "\uFFFD", "illegal-codepoint-for-numeric-entity", 0xFDD0),
    ("#1;", "\x01", "control-character-reference", 1),
    ("#x0D;", "\r", "control-character-reference", 0x0D),
    ("#x7F;", "\x7f", "control-character-reference", 0x7F),
])
def test_bad_codepoints(text, output, code, value):
    rv, rest, parseError = consume(text)
    assert rv == output
    parseError.assert_called_once_with(code, {"charAsInt": value})


def test_null_reference():
    rv, rest, parseError = consume("#0;")
    assert rv == "\uFFFD"
    parseError.assert_called_once_with("null-character-reference")


def test_huge_reference():
    rv, rest, parseError = consume("#99999999999999999999;")
    assert rv == "\uFFFD"
    assert parseError.call_args[0][0] == "illegal-codepoint-for-numeric-entity"


@pytest.mark.parametrize("text, output, rest", [
    ("#;", "&#", ";"),
    ("#xg;", "&#x", "g;"),
    ("#", "&#", ""),
])
def test_missing_digits(text, output, rest):
    rv, remaining, parseError = consume(text)
    assert (rv, remaining) == (output, rest)
    parseError.assert_called_once_with("expected-numeric-entity")


@pytest.mark.parametrize("text, rest", [
    ("", ""),
    (" x", " x"),
    ("<", "<"),
])
def test_not_a_reference(text, rest):
    rv, remaining, parseError = consume(text)
    assert (rv, remaining) == ("&", rest)
    assert not parseError.called


def test_unknown_name():
    rv, rest, parseError = consume("zzz;")
    assert (rv, rest) == ("&zzz", ";")
    parseError.assert_called_once_with("expected-named-entity")

    rv, rest, parseError = consume("zzz x")
    assert (rv, rest) == ("&zzz", " x")
    assert not parseError.called


def test_attribute_value_withdrawal():
    rv, rest, parseError = consume("copy=2", fromAttribute=True)
    assert (rv, rest) == ("&copy", "=2")
    assert not parseError.called

    rv, rest, parseError = consume("ampx", fromAttribute=True)
    assert (rv, rest) == ("&amp", "x")
    assert not parseError.called


def test_attribute_value_reference_without_semicolon():
    rv, rest, parseError = consume("amp\"", fromAttribute=True)
    assert (rv, rest) == ("&", "\"")
    parseError.assert_called_once_with("named-entity-without-semicolon")


def test_text_reference_before_equals():
    rv, rest, parseError = consume("copy=2")
    assert (rv, rest) == ("\xa9", "=2")
    parseError.assert_called_once_with("named-entity-without-semicolon")


def test_entities_trie():
    assert entitiesTrie.has_keys_with_prefix("noti")
    assert not entitiesTrie.has_keys_with_prefix("zz")
    assert entitiesTrie.longest_prefix("notit") == "not"
    assert entitiesTrie["amp;"] == "&"


@pytest.mark.parametrize("text, expected", [
    ("", ""),
    ("plain", "plain"),
    ("fish &amp; chips", "fish & chips"),
    ("a &lt b", "a < b"),
    ("x&", "x&"),
    ("&&amp;&", "&&&"),
    ("&#x1F600;&#128512;", "\U0001F600\U0001F600"),
    ("?a=1&copy=2", "?a=1\xa9=2"),
    ("a\r\nb", "a\nb"),
])
def test_unescape(text, expected):
    assert unescape(text) == expected


def test_unescape_attribute():
    assert unescape("?a=1&copy=2&amp;b", fromAttribute=True) == "?a=1&copy=2&b"
