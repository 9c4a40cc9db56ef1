import pytest

from html5tok import (Characters, Comment, Doctype, EndOfInput, EndTag,
                      HTMLTokenizer, StartTag, tokenize)
from html5tok.filters import base
from html5tok.filters.alphabeticalattributes import Filter as AlphabeticalAttributesFilter
from html5tok.filters.lint import Filter as LintFilter
from html5tok.filters.lint import LintError


def test_base_filter_proxies_source():
    tokenizer = HTMLTokenizer("<p>x")
    f = base.Filter(tokenizer)
    assert list(f) == [StartTag("p"), Characters("x")]
    assert f.errors == []
    assert f.stream is tokenizer.stream


def test_alphabetical_attributes():
    tokens = [StartTag("a", {"c": "1", "b": "2"}, True), EndTag("a"), Characters("x")]
    filtered = list(AlphabeticalAttributesFilter(tokens))
    assert list(filtered[0].attributes) == ["b", "c"]
    assert filtered[0].self_closing
    assert filtered[1:] == tokens[1:]


def test_lint_passes_tokenizer_output():
    document = ("<!DOCTYPE html><p CLASS=a>x&amp;y</p><!--c--><script>1</script>"
                "<a b c=d/><![CDATA[x]]><?pi>")
    tokens = list(tokenize(document))
    assert list(LintFilter(tokens)) == tokens


def test_lint_allows_trailing_end_of_input():
    tokens = [Characters("x"), EndOfInput()]
    assert list(LintFilter(tokens)) == tokens


@pytest.mark.parametrize("tokens", [
    [StartTag("DIV")],
    [EndTag("")],
    [StartTag(None)],
    [StartTag("a", {"B": "x"})],
    [StartTag("a", {"": "x"})],
    [StartTag("a", {"b": 1})],
    [Characters("")],
    [Characters(b"x")],
    [Comment(None)],
    [Doctype(1)],
    [Doctype("html", None, b"x")],
    [EndOfInput(), Characters("x")],
    [object()],
])
def test_lint_errors(tokens):
    with pytest.raises(LintError):
        list(LintFilter(tokens))
