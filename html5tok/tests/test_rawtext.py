import logging

import pytest

from html5tok._rawtext import RawTextMode
from html5tok._tokenizer import contentModelStates
from html5tok.constants import rawtextElements, scriptingRawtextElements


@pytest.mark.parametrize("name, model", [
    ("title", "RCDATA"),
    ("textarea", "RCDATA"),
    ("style", "RAWTEXT"),
    ("xmp", "RAWTEXT"),
    ("iframe", "RAWTEXT"),
    ("noembed", "RAWTEXT"),
    ("noframes", "RAWTEXT"),
    ("script", "SCRIPT_DATA"),
    ("plaintext", "PLAINTEXT"),
    ("noscript", None),
    ("div", None),
])
def test_contentModelFor(name, model):
    assert RawTextMode().contentModelFor(name) == model


def test_noscript_with_scripting():
    assert RawTextMode(scripting=True).contentModelFor("noscript") == "RAWTEXT"


def test_enter_and_exit():
    mode = RawTextMode()
    assert not mode.is_active()
    assert mode.enter("script") == "SCRIPT_DATA"
    assert mode.is_active()
    assert mode.element == "script"
    assert mode.matches_end_tag("SCRIPT")
    assert not mode.matches_end_tag("scrip")
    mode.exit()
    assert not mode.is_active()
    assert mode.contentModel == "PCDATA"
    assert not mode.matches_end_tag("script")


def test_enter_ordinary_element():
    with pytest.raises(ValueError):
        RawTextMode().enter("div")


def test_plaintext_is_final():
    mode = RawTextMode()
    mode.enter("plaintext")
    assert not mode.matches_end_tag("plaintext")
    mode.exit()
    assert mode.contentModel == "PLAINTEXT"
    assert mode.enter("title") == "PLAINTEXT"
    assert mode.element == "plaintext"


def test_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="html5tok._rawtext")
    mode = RawTextMode()
    mode.enter("title")
    mode.exit()
    assert [r.getMessage() for r in caplog.records] == [
        "entering RCDATA content of <title>",
        "leaving RCDATA content of <title>",
    ]


def test_every_content_model_has_a_state():
    models = set(rawtextElements.values()) | set(scriptingRawtextElements.values())
    assert models == set(contentModelStates)
