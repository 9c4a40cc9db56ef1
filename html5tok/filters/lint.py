from . import base
from .._tokens import (Characters, Comment, Doctype, EndOfInput, EndTag,
                       StartTag)
from ..constants import asciiUppercase


class LintError(Exception):
    pass


def _checkTagName(name):
    if not isinstance(name, str):
        raise LintError("Tag name is not a string: %(tag)r" % {"tag": name})
    if not name:
        raise LintError("Empty tag name")
    if asciiUppercase.intersection(name):
        raise LintError("Tag name is not lowercase: %(tag)s" % {"tag": name})


class Filter(base.Filter):
    """Checks that a token stream is one the tokenizer could have produced.

    Tokens are passed through unchanged; the first violation raises
    :class:`LintError`.
    """
    def __iter__(self):
        finished = False
        for token in base.Filter.__iter__(self):
            if finished:
                raise LintError("Token after EndOfInput: %(token)r" % {"token": token})

            if isinstance(token, (StartTag, EndTag)):
                _checkTagName(token.name)
                for name, value in token.attributes.items():
                    if not isinstance(name, str):
                        raise LintError("Attribute name is not a string: %(name)r" % {"name": name})
                    if not name:
                        raise LintError("Empty attribute name")
                    if asciiUppercase.intersection(name):
                        raise LintError("Attribute name is not lowercase: %(name)s" % {"name": name})
                    if not isinstance(value, str):
                        raise LintError("Attribute value is not a string: %(value)r" % {"value": value})

            elif isinstance(token, Characters):
                data = token.data
                if not isinstance(data, str):
                    raise LintError("Characters data is not a string: %(data)r" % {"data": data})
                if not data:
                    raise LintError("Characters token with empty data")

            elif isinstance(token, Comment):
                if not isinstance(token.data, str):
                    raise LintError("Comment data is not a string: %(data)r" % {"data": token.data})

            elif isinstance(token, Doctype):
                for field in ("name", "public_id", "system_id"):
                    value = getattr(token, field)
                    if value is not None and not isinstance(value, str):
                        raise LintError("Doctype %(field)s is not a string or None: %(value)r" %
                                        {"field": field, "value": value})

            elif isinstance(token, EndOfInput):
                finished = True

            else:
                raise LintError("Unknown token: %(token)r" % {"token": token})

            yield token
