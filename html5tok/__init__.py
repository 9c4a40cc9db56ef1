"""
Streaming HTML tokenizer following the WHATWG tokenization rules.
It turns markup into a flat sequence of tokens (start and end tags,
character data, comments and DOCTYPEs) without building a tree, and
recovers from malformed input the way browsers do.

Example usage::

    import html5tok
    with open("my_document.html", "rb") as f:
        for token in html5tok.tokenize(f):
            print(token)
"""

from ._tokenizer import HTMLTokenizer, State, tokenize
from ._tokens import (StartTag, EndTag, Characters, Comment, Doctype,
                      EndOfInput, ParseError)
from ._inputstream import HTMLInputStream
from ._entities import unescape
from .serializer import serialize, HTMLSerializer

__all__ = ["HTMLTokenizer", "State", "tokenize",
           "StartTag", "EndTag", "Characters", "Comment", "Doctype",
           "EndOfInput", "ParseError", "HTMLInputStream", "unescape",
           "serialize", "HTMLSerializer"]

# this has to be at the top level, see how setup.py parses this
#: Distribution version number.
__version__ = "1.0.0.dev0"
