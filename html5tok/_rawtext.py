import logging

from .constants import asciiUpper2Lower, rawtextElements, scriptingRawtextElements

log = logging.getLogger(__name__)


class RawTextMode(object):
    """Tracks the raw text element, if any, whose content is being read.

    Inside ``<script>``, ``<style>``, ``<title>`` and friends markup is not
    recognized; the content runs until an end tag whose name matches the
    element that opened it. ``contentModel`` is ``"PCDATA"`` outside raw
    text, or the content model the element selects in
    :data:`~html5tok.constants.rawtextElements`.

    ``<plaintext>`` can be entered but never left.
    """

    def __init__(self, scripting=False):
        self.scripting = scripting
        self.element = None
        self.contentModel = "PCDATA"

    def contentModelFor(self, name):
        """Return the content model a start tag named ``name`` switches to,
        or None if it is not a raw text element."""
        model = rawtextElements.get(name)
        if model is None and self.scripting:
            model = scriptingRawtextElements.get(name)
        return model

    def enter(self, name):
        model = self.contentModelFor(name)
        if model is None:
            raise ValueError("%r is not a raw text element" % (name,))
        if self.contentModel == "PLAINTEXT":
            return self.contentModel
        log.debug("entering %s content of <%s>", model, name)
        self.element = name
        self.contentModel = model
        return model

    def exit(self):
        if self.contentModel == "PLAINTEXT":
            log.debug("plaintext content cannot be left")
            return
        if self.element is not None:
            log.debug("leaving %s content of <%s>", self.contentModel, self.element)
        self.element = None
        self.contentModel = "PCDATA"

    def is_active(self):
        """True while the tokenizer reads raw text; it picks the state the
        tokenizer returns to after each tag."""
        return self.element is not None

    def matches_end_tag(self, name):
        """True if ``name`` closes the current raw text element."""
        if not self.is_active() or self.contentModel == "PLAINTEXT":
            return False
        return name.translate(asciiUpper2Lower) == self.element
