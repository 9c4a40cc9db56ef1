from . import base
from .._tokens import StartTag


class Filter(base.Filter):
    """Alphabetizes attributes for start tags"""
    def __iter__(self):
        for token in base.Filter.__iter__(self):
            if isinstance(token, StartTag):
                attrs = sorted(token.attributes.items(), key=lambda x: x[0])
                token = StartTag(token.name, attrs, token.self_closing)
            yield token
