import pytest

from html5tok import (Characters, Comment, Doctype, EndOfInput, EndTag,
                      HTMLSerializer, StartTag, serialize, tokenize)
from html5tok.serializer import SerializeError

documents = [
    "<!DOCTYPE html><html lang=en><head><title>A &amp; B</title>"
    "<script>if (a < b && c) {}</script></head>"
    "<body><p id=x class='a \"b\"'>Hi<br>there<!-- note --></p>"
    "<textarea>&lt;b&gt;</textarea><img src=\"a.png\" alt=\"\"></body></html>",
    "<!DOCTYPE html PUBLIC \"-//W3C//DTD HTML 4.01//EN\" "
    "\"http://www.w3.org/TR/html4/strict.dtd\"><p title='it&#39;s'>1 &lt; 2 &amp;&nbsp;3",
    "<svg><path d=\"M 0 0\"/></svg><style>p > a { color: red }</style>",
]


@pytest.mark.parametrize("document", documents)
def test_round_trip(document):
    tokens = list(tokenize(document))
    assert list(tokenize(serialize(tokens))) == tokens


def test_noscript_round_trip():
    document = "<noscript>&lt;b&gt;x</noscript>"
    tokens = list(tokenize(document))
    assert tokens == [StartTag("noscript"), Characters("<b>x"), EndTag("noscript")]
    assert serialize(tokens) == document
    assert list(tokenize(serialize(tokens))) == tokens


def test_noscript_round_trip_with_scripting():
    document = "<noscript><b>&amp;</noscript>"
    tokens = list(tokenize(document, scripting=True))
    assert tokens == [StartTag("noscript"), Characters("<b>&amp;"), EndTag("noscript")]
    assert serialize(tokens, scripting=True) == document
    assert list(tokenize(serialize(tokens, scripting=True), scripting=True)) == tokens


def test_defaults():
    assert serialize(tokenize("<p class=a title='x y'>1 &lt; 2")) == \
        '<p class=a title="x y">1 &lt; 2'


def test_text_escaping():
    assert serialize([Characters("a<b>&c\xa0")]) == "a&lt;b&gt;&amp;c&nbsp;"


def test_raw_text_is_not_escaped():
    tokens = [StartTag("script"), Characters("a<b&&c"), EndTag("script"), Characters("<")]
    assert serialize(tokens) == "<script>a<b&&c</script>&lt;"
    assert serialize(tokens, escape_rcdata=True) == "<script>a&lt;b&amp;&amp;c</script>&lt;"


@pytest.mark.parametrize("value, legacy, spec, always", [
    ("x", "x", "x", '"x"'),
    ("", '""', '""', '""'),
    ("a b", '"a b"', '"a b"', '"a b"'),
    ("a/b", '"a/b"', "a/b", '"a/b"'),
    ("a=b", '"a=b"', '"a=b"', '"a=b"'),
    ("a\xa0b", '"a&nbsp;b"', "a&nbsp;b", '"a&nbsp;b"'),
])
def test_quote_attr_values(value, legacy, spec, always):
    token = [StartTag("a", {"t": value})]
    assert serialize(token) == "<a t=%s>" % legacy
    assert serialize(token, quote_attr_values="spec") == "<a t=%s>" % spec
    assert serialize(token, quote_attr_values="always") == "<a t=%s>" % always


def test_quote_char():
    token = [StartTag("a", {"t": "x y"})]
    assert serialize(token, quote_char="'") == "<a t='x y'>"
    token = [StartTag("a", {"t": "it's \"q\""})]
    assert serialize(token) == "<a t=\"it's &quot;q&quot;\">"
    assert serialize(token, quote_char="'") == "<a t='it&#39;s \"q\"'>"
    assert serialize([StartTag("a", {"t": "say \"hi\""})]) == "<a t='say \"hi\"'>"


def test_escape_lt_in_attrs():
    token = [StartTag("a", {"t": "<x>"})]
    assert serialize(token) == '<a t="<x>">'
    assert serialize(token, escape_lt_in_attrs=True) == '<a t="&lt;x&gt;">'


def test_boolean_attributes():
    tokens = list(tokenize("<input disabled=disabled type=checkbox>"))
    assert serialize(tokens) == "<input disabled type=checkbox>"
    assert serialize(tokens, minimize_boolean_attributes=False) == \
        "<input disabled=disabled type=checkbox>"
    assert serialize([StartTag("div", {"itemscope": ""})]) == "<div itemscope>"


def test_trailing_solidus():
    tokens = [StartTag("br"), StartTag("p")]
    assert serialize(tokens) == "<br><p>"
    assert serialize(tokens, use_trailing_solidus=True) == "<br /><p>"
    assert serialize(tokens, use_trailing_solidus=True,
                     space_before_trailing_solidus=False) == "<br/><p>"
    assert serialize([StartTag("path", self_closing=True)]) == "<path />"


def test_alphabetical_attributes():
    token = [StartTag("a", {"c": "1", "b": "2", "a": "3"})]
    assert serialize(token) == "<a c=1 b=2 a=3>"
    assert serialize(token, alphabetical_attributes=True) == "<a a=3 b=2 c=1>"


@pytest.mark.parametrize("token, expected", [
    (Doctype("html"), "<!DOCTYPE html>"),
    (Doctype(), "<!DOCTYPE>"),
    (Doctype("html", "-//W3C//DTD HTML 4.01//EN"),
     '<!DOCTYPE html PUBLIC "-//W3C//DTD HTML 4.01//EN">'),
    (Doctype("html", None, "about:legacy-compat"),
     '<!DOCTYPE html SYSTEM "about:legacy-compat">'),
    (Doctype("html", "", "a\"b"), "<!DOCTYPE html PUBLIC \"\" 'a\"b'>"),
])
def test_doctype(token, expected):
    assert serialize([token]) == expected


def test_end_of_input_stops_output():
    assert serialize([Characters("a"), EndOfInput(), Characters("b")]) == "a"


def test_encoding():
    tokens = [StartTag("p", {"title": "caf\xe9"}), Characters("caf\xe9 \u4e2d")]
    rv = serialize(tokens, encoding="ascii")
    assert isinstance(rv, bytes)
    assert rv == b"<p title=caf&eacute;>caf&eacute; &#x4e2d;"
    assert serialize(tokens, encoding="utf-8") == \
        "<p title=caf\xe9>caf\xe9 \u4e2d".encode("utf-8")


def test_errors_are_collected():
    s = HTMLSerializer()
    assert s.render([Comment("a--b")]) == "<!--a--b-->"
    assert s.errors == ["Comment contains --"]

    s.render([StartTag("script"), Characters("</x>"), EndTag("script")])
    assert s.errors == ["Unexpected </ in CDATA"]

    s.render([object()])
    assert len(s.errors) == 1
    assert s.errors[0].startswith("Unknown token: ")


def test_strict():
    with pytest.raises(SerializeError):
        serialize([Comment("a--b")], strict=True)
    with pytest.raises(SerializeError):
        serialize([Doctype("html", None, "'\"")], strict=True)


def test_unknown_option():
    with pytest.raises(ValueError):
        HTMLSerializer(no_such_option=True)
    with pytest.raises(ValueError):
        HTMLSerializer(quote_attr_values="sometimes")
