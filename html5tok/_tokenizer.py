import logging
from enum import Enum

from ._emitter import TokenEmitter
from ._entities import EntityDecoder
from ._inputstream import HTMLInputStream
from ._rawtext import RawTextMode
from ._tokens import EndOfInput, EndTag, ParseError, StartTag
from .constants import EOF, asciiLetters, asciiUpper2Lower, spaceCharacters

log = logging.getLogger(__name__)


class State(Enum):
    """Tokenizer states. The value of each member names the
    :class:`HTMLTokenizer` method that handles it."""

    DATA = "dataState"
    CHARACTER_REFERENCE_IN_DATA = "characterReferenceInDataState"
    RCDATA = "rcdataState"
    CHARACTER_REFERENCE_IN_RCDATA = "characterReferenceInRcdataState"
    RAWTEXT = "rawtextState"
    SCRIPT_DATA = "scriptDataState"
    PLAINTEXT = "plaintextState"
    TAG_OPEN = "tagOpenState"
    END_TAG_OPEN = "endTagOpenState"
    TAG_NAME = "tagNameState"
    RCDATA_LESS_THAN_SIGN = "rcdataLessThanSignState"
    RCDATA_END_TAG_OPEN = "rcdataEndTagOpenState"
    RCDATA_END_TAG_NAME = "rcdataEndTagNameState"
    RAWTEXT_LESS_THAN_SIGN = "rawtextLessThanSignState"
    RAWTEXT_END_TAG_OPEN = "rawtextEndTagOpenState"
    RAWTEXT_END_TAG_NAME = "rawtextEndTagNameState"
    SCRIPT_DATA_LESS_THAN_SIGN = "scriptDataLessThanSignState"
    SCRIPT_DATA_END_TAG_OPEN = "scriptDataEndTagOpenState"
    SCRIPT_DATA_END_TAG_NAME = "scriptDataEndTagNameState"
    SCRIPT_DATA_ESCAPE_START = "scriptDataEscapeStartState"
    SCRIPT_DATA_ESCAPE_START_DASH = "scriptDataEscapeStartDashState"
    SCRIPT_DATA_ESCAPED = "scriptDataEscapedState"
    SCRIPT_DATA_ESCAPED_DASH = "scriptDataEscapedDashState"
    SCRIPT_DATA_ESCAPED_DASH_DASH = "scriptDataEscapedDashDashState"
    SCRIPT_DATA_ESCAPED_LESS_THAN_SIGN = "scriptDataEscapedLessThanSignState"
    SCRIPT_DATA_ESCAPED_END_TAG_OPEN = "scriptDataEscapedEndTagOpenState"
    SCRIPT_DATA_ESCAPED_END_TAG_NAME = "scriptDataEscapedEndTagNameState"
    SCRIPT_DATA_DOUBLE_ESCAPE_START = "scriptDataDoubleEscapeStartState"
    SCRIPT_DATA_DOUBLE_ESCAPED = "scriptDataDoubleEscapedState"
    SCRIPT_DATA_DOUBLE_ESCAPED_DASH = "scriptDataDoubleEscapedDashState"
    SCRIPT_DATA_DOUBLE_ESCAPED_DASH_DASH = "scriptDataDoubleEscapedDashDashState"
    SCRIPT_DATA_DOUBLE_ESCAPED_LESS_THAN_SIGN = "scriptDataDoubleEscapedLessThanSignState"
    SCRIPT_DATA_DOUBLE_ESCAPE_END = "scriptDataDoubleEscapeEndState"
    BEFORE_ATTRIBUTE_NAME = "beforeAttributeNameState"
    ATTRIBUTE_NAME = "attributeNameState"
    AFTER_ATTRIBUTE_NAME = "afterAttributeNameState"
    BEFORE_ATTRIBUTE_VALUE = "beforeAttributeValueState"
    ATTRIBUTE_VALUE_DOUBLE_QUOTED = "attributeValueDoubleQuotedState"
    ATTRIBUTE_VALUE_SINGLE_QUOTED = "attributeValueSingleQuotedState"
    ATTRIBUTE_VALUE_UNQUOTED = "attributeValueUnQuotedState"
    AFTER_ATTRIBUTE_VALUE_QUOTED = "afterAttributeValueState"
    SELF_CLOSING_START_TAG = "selfClosingStartTagState"
    BOGUS_COMMENT = "bogusCommentState"
    MARKUP_DECLARATION_OPEN = "markupDeclarationOpenState"
    COMMENT_START = "commentStartState"
    COMMENT_START_DASH = "commentStartDashState"
    COMMENT = "commentState"
    COMMENT_END_DASH = "commentEndDashState"
    COMMENT_END = "commentEndState"
    COMMENT_END_BANG = "commentEndBangState"
    DOCTYPE = "doctypeState"
    BEFORE_DOCTYPE_NAME = "beforeDoctypeNameState"
    DOCTYPE_NAME = "doctypeNameState"
    AFTER_DOCTYPE_NAME = "afterDoctypeNameState"
    AFTER_DOCTYPE_PUBLIC_KEYWORD = "afterDoctypePublicKeywordState"
    BEFORE_DOCTYPE_PUBLIC_IDENTIFIER = "beforeDoctypePublicIdentifierState"
    DOCTYPE_PUBLIC_IDENTIFIER_DOUBLE_QUOTED = "doctypePublicIdentifierDoubleQuotedState"
    DOCTYPE_PUBLIC_IDENTIFIER_SINGLE_QUOTED = "doctypePublicIdentifierSingleQuotedState"
    AFTER_DOCTYPE_PUBLIC_IDENTIFIER = "afterDoctypePublicIdentifierState"
    BETWEEN_DOCTYPE_PUBLIC_AND_SYSTEM_IDENTIFIERS = "betweenDoctypePublicAndSystemIdentifiersState"
    AFTER_DOCTYPE_SYSTEM_KEYWORD = "afterDoctypeSystemKeywordState"
    BEFORE_DOCTYPE_SYSTEM_IDENTIFIER = "beforeDoctypeSystemIdentifierState"
    DOCTYPE_SYSTEM_IDENTIFIER_DOUBLE_QUOTED = "doctypeSystemIdentifierDoubleQuotedState"
    DOCTYPE_SYSTEM_IDENTIFIER_SINGLE_QUOTED = "doctypeSystemIdentifierSingleQuotedState"
    AFTER_DOCTYPE_SYSTEM_IDENTIFIER = "afterDoctypeSystemIdentifierState"
    BOGUS_DOCTYPE = "bogusDoctypeState"
    EOF = "eof"


# The state each raw text content model starts in
contentModelStates = {
    "RCDATA": State.RCDATA,
    "RAWTEXT": State.RAWTEXT,
    "SCRIPT_DATA": State.SCRIPT_DATA,
    "PLAINTEXT": State.PLAINTEXT,
}

_scriptEscapeEnd = spaceCharacters | frozenset(("/", ">"))
_unquotedAttributeEnd = spaceCharacters | frozenset(("&", ">", '"', "'", "=", "<", "`", "\u0000"))


class HTMLTokenizer(object):
    """ This class takes care of tokenizing HTML.

    * self.state
      The current :class:`State`; the method it names is run once per step.

    * self.stream
      The character reader, an ``HTMLInputStream``.

    * self.emitter
      Builds the token under construction and queues finished tokens.

    * self.rawtext
      The raw text element (``<script>``, ``<title>``...) being read, if any.

    * self.errors
      Every :class:`ParseError` found so far, in the order they were found.

    Call :meth:`next_token` repeatedly, or iterate, to get tokens.
    """

    def __init__(self, stream, encoding=None, container=None, scripting=False):
        self.stream = HTMLInputStream(stream, encoding)
        self.errors = []

        self.emitter = TokenEmitter(self.parseError)
        self.entities = EntityDecoder(self.stream, self.parseError)
        self.rawtext = RawTextMode(scripting)
        self.temporaryBuffer = ""

        self._stateHandlers = dict((state, getattr(self, state.value))
                                   for state in State if state is not State.EOF)

        # Setup the initial tokenizer state
        self.state = State.DATA
        if container is not None:
            container = container.translate(asciiUpper2Lower)
            if self.rawtext.contentModelFor(container) is not None:
                self.state = contentModelStates[self.rawtext.enter(container)]

    def __iter__(self):
        """Yield tokens up to, but not including, :class:`EndOfInput`."""
        while True:
            token = self.next_token()
            if isinstance(token, EndOfInput):
                return
            yield token

    def next_token(self):
        """Return the next token.

        Once the input is exhausted this returns an :class:`EndOfInput` token,
        on this and every later call.
        """
        tokenQueue = self.emitter.tokenQueue
        while not tokenQueue:
            if self.state is State.EOF:
                return EndOfInput()
            self._stateHandlers[self.state]()
            self._collectStreamErrors()
        return tokenQueue.popleft()

    def _collectStreamErrors(self):
        stream = self.stream
        while stream.errors:
            code, position, offset = stream.errors.pop(0)
            self._addError(ParseError(code, position, offset))

    def _addError(self, error):
        log.debug("parse error %s at line %d col %d", error.code, *error.position)
        self.errors.append(error)

    def parseError(self, code, datavars=None):
        self._collectStreamErrors()
        self._addError(ParseError(code, self.stream.position(), self.stream.offset(),
                                  datavars))

    def emitCurrentToken(self):
        """Finish the token under construction and queue it.

        A start tag for a raw text element switches the tokenizer into that
        element's content model, and it stays there until the matching end
        tag leaves raw text again.
        """
        token = self.emitter.finalize()
        self.emitter.emit(token)
        if isinstance(token, StartTag) and self.rawtext.contentModelFor(token.name) is not None:
            self.rawtext.enter(token.name)
        if self.rawtext.is_active():
            self.state = contentModelStates[self.rawtext.contentModel]
        else:
            self.state = State.DATA

    def emitPartialToken(self, code, datavars=None, forceQuirks=False):
        """Report EOF inside a construct, then queue what was read of it."""
        self.parseError(code, datavars)
        if forceQuirks:
            self.emitter.set_force_quirks()
        self.emitter.emit(self.emitter.finalize())
        self.emitEOF()

    def emitEOF(self):
        self.emitter.flush_characters()
        self.state = State.EOF

    # Below are the various tokenizer states worked out.

    def dataState(self):
        data = self.stream.char()
        if data == "&":
            self.state = State.CHARACTER_REFERENCE_IN_DATA
        elif data == "<":
            self.state = State.TAG_OPEN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        elif data is EOF:
            self.emitEOF()
        else:
            chars = self.stream.charsUntil(("&", "<", "\u0000"))
            self.emitter.emit_characters(data + chars)

    def characterReferenceInDataState(self):
        self.emitter.emit_characters(self.entities.consumeEntity())
        self.state = State.DATA

    def rcdataState(self):
        data = self.stream.char()
        if data == "&":
            self.state = State.CHARACTER_REFERENCE_IN_RCDATA
        elif data == "<":
            self.state = State.RCDATA_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        elif data is EOF:
            self.emitEOF()
        else:
            chars = self.stream.charsUntil(("&", "<", "\u0000"))
            self.emitter.emit_characters(data + chars)

    def characterReferenceInRcdataState(self):
        self.emitter.emit_characters(self.entities.consumeEntity())
        self.state = State.RCDATA

    def rawtextState(self):
        data = self.stream.char()
        if data == "<":
            self.state = State.RAWTEXT_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        elif data is EOF:
            self.emitEOF()
        else:
            chars = self.stream.charsUntil(("<", "\u0000"))
            self.emitter.emit_characters(data + chars)

    def scriptDataState(self):
        data = self.stream.char()
        if data == "<":
            self.state = State.SCRIPT_DATA_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        elif data is EOF:
            self.emitEOF()
        else:
            chars = self.stream.charsUntil(("<", "\u0000"))
            self.emitter.emit_characters(data + chars)

    def plaintextState(self):
        data = self.stream.char()
        if data is EOF:
            self.emitEOF()
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        else:
            self.emitter.emit_characters(data + self.stream.charsUntil("\u0000"))

    def tagOpenState(self):
        data = self.stream.char()
        if data == "!":
            self.state = State.MARKUP_DECLARATION_OPEN
        elif data == "/":
            self.state = State.END_TAG_OPEN
        elif data in asciiLetters:
            self.emitter.start_tag(StartTag, data)
            self.state = State.TAG_NAME
        elif data == "?":
            # XXX In theory it could be something besides a tag name. But
            # do we really care?
            self.parseError("expected-tag-name-but-got-question-mark")
            self.stream.unget(data)
            self.emitter.start_comment()
            self.state = State.BOGUS_COMMENT
        elif data is EOF:
            self.parseError("eof-before-tag-name")
            self.emitter.emit_characters("<")
            self.emitEOF()
        else:
            self.parseError("expected-tag-name")
            self.emitter.emit_characters("<")
            self.stream.unget(data)
            self.state = State.DATA

    def endTagOpenState(self):
        data = self.stream.char()
        if data in asciiLetters:
            self.emitter.start_tag(EndTag, data)
            self.state = State.TAG_NAME
        elif data == ">":
            self.parseError("expected-closing-tag-but-got-right-bracket")
            self.state = State.DATA
        elif data is EOF:
            self.parseError("expected-closing-tag-but-got-eof")
            self.emitter.emit_characters("</")
            self.emitEOF()
        else:
            # XXX data can be _'_...
            self.parseError("expected-closing-tag-but-got-char",
                            {"data": data})
            self.stream.unget(data)
            self.emitter.start_comment()
            self.state = State.BOGUS_COMMENT

    def tagNameState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.state = State.BEFORE_ATTRIBUTE_NAME
        elif data == ">":
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-tag-name")
        elif data == "/":
            self.state = State.SELF_CLOSING_START_TAG
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        else:
            self.emitter.append_char(data)
            # (Don't use charsUntil here, because tag names are
            # very short and it's faster to not do anything fancy)

    # Raw text end tags. The end tag open and end tag name states are the
    # same for RCDATA, RAWTEXT and the two script data grammars apart from
    # the state they fall back to.

    def _lessThanSignInRawText(self, endTagOpenState, returnState):
        data = self.stream.char()
        if data == "/":
            self.temporaryBuffer = ""
            self.state = endTagOpenState
        else:
            self.emitter.emit_characters("<")
            self.stream.unget(data)
            self.state = returnState

    def _endTagOpenInRawText(self, endTagNameState, returnState):
        data = self.stream.char()
        if data in asciiLetters:
            self.temporaryBuffer += data
            self.state = endTagNameState
        else:
            self.emitter.emit_characters("</")
            self.stream.unget(data)
            self.state = returnState

    def _endTagNameInRawText(self, returnState):
        data = self.stream.char()
        if data in asciiLetters:
            self.temporaryBuffer += data
            return

        if self.rawtext.matches_end_tag(self.temporaryBuffer):
            if data in spaceCharacters:
                self._startAppropriateEndTag()
                self.state = State.BEFORE_ATTRIBUTE_NAME
                return
            elif data == "/":
                self._startAppropriateEndTag()
                self.state = State.SELF_CLOSING_START_TAG
                return
            elif data == ">":
                self._startAppropriateEndTag()
                self.emitCurrentToken()
                return

        # Not the end of the element after all
        self.emitter.emit_characters("</" + self.temporaryBuffer)
        self.stream.unget(data)
        self.state = returnState

    def _startAppropriateEndTag(self):
        self.rawtext.exit()
        self.emitter.start_tag(EndTag, self.temporaryBuffer)

    def rcdataLessThanSignState(self):
        self._lessThanSignInRawText(State.RCDATA_END_TAG_OPEN, State.RCDATA)

    def rcdataEndTagOpenState(self):
        self._endTagOpenInRawText(State.RCDATA_END_TAG_NAME, State.RCDATA)

    def rcdataEndTagNameState(self):
        self._endTagNameInRawText(State.RCDATA)

    def rawtextLessThanSignState(self):
        self._lessThanSignInRawText(State.RAWTEXT_END_TAG_OPEN, State.RAWTEXT)

    def rawtextEndTagOpenState(self):
        self._endTagOpenInRawText(State.RAWTEXT_END_TAG_NAME, State.RAWTEXT)

    def rawtextEndTagNameState(self):
        self._endTagNameInRawText(State.RAWTEXT)

    def scriptDataLessThanSignState(self):
        data = self.stream.char()
        if data == "/":
            self.temporaryBuffer = ""
            self.state = State.SCRIPT_DATA_END_TAG_OPEN
        elif data == "!":
            self.emitter.emit_characters("<!")
            self.state = State.SCRIPT_DATA_ESCAPE_START
        else:
            self.emitter.emit_characters("<")
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA

    def scriptDataEndTagOpenState(self):
        self._endTagOpenInRawText(State.SCRIPT_DATA_END_TAG_NAME, State.SCRIPT_DATA)

    def scriptDataEndTagNameState(self):
        self._endTagNameInRawText(State.SCRIPT_DATA)

    def scriptDataEscapeStartState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
            self.state = State.SCRIPT_DATA_ESCAPE_START_DASH
        else:
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA

    def scriptDataEscapeStartDashState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
            self.state = State.SCRIPT_DATA_ESCAPED_DASH_DASH
        else:
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA

    def scriptDataEscapedState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
            self.state = State.SCRIPT_DATA_ESCAPED_DASH
        elif data == "<":
            self.state = State.SCRIPT_DATA_ESCAPED_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        elif data is EOF:
            self.parseError("eof-in-script-html-comment-like-text")
            self.emitEOF()
        else:
            chars = self.stream.charsUntil(("<", "-", "\u0000"))
            self.emitter.emit_characters(data + chars)

    def scriptDataEscapedDashState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
            self.state = State.SCRIPT_DATA_ESCAPED_DASH_DASH
        elif data == "<":
            self.state = State.SCRIPT_DATA_ESCAPED_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
            self.state = State.SCRIPT_DATA_ESCAPED
        elif data is EOF:
            self.parseError("eof-in-script-html-comment-like-text")
            self.emitEOF()
        else:
            self.emitter.emit_characters(data)
            self.state = State.SCRIPT_DATA_ESCAPED

    def scriptDataEscapedDashDashState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
        elif data == "<":
            self.state = State.SCRIPT_DATA_ESCAPED_LESS_THAN_SIGN
        elif data == ">":
            self.emitter.emit_characters(">")
            self.state = State.SCRIPT_DATA
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
            self.state = State.SCRIPT_DATA_ESCAPED
        elif data is EOF:
            self.parseError("eof-in-script-html-comment-like-text")
            self.emitEOF()
        else:
            self.emitter.emit_characters(data)
            self.state = State.SCRIPT_DATA_ESCAPED

    def scriptDataEscapedLessThanSignState(self):
        data = self.stream.char()
        if data == "/":
            self.temporaryBuffer = ""
            self.state = State.SCRIPT_DATA_ESCAPED_END_TAG_OPEN
        elif data in asciiLetters:
            self.emitter.emit_characters("<" + data)
            self.temporaryBuffer = data
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPE_START
        else:
            self.emitter.emit_characters("<")
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA_ESCAPED

    def scriptDataEscapedEndTagOpenState(self):
        self._endTagOpenInRawText(State.SCRIPT_DATA_ESCAPED_END_TAG_NAME,
                                  State.SCRIPT_DATA_ESCAPED)

    def scriptDataEscapedEndTagNameState(self):
        self._endTagNameInRawText(State.SCRIPT_DATA_ESCAPED)

    def scriptDataDoubleEscapeStartState(self):
        data = self.stream.char()
        if data in _scriptEscapeEnd:
            self.emitter.emit_characters(data)
            if self.temporaryBuffer.translate(asciiUpper2Lower) == "script":
                self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED
            else:
                self.state = State.SCRIPT_DATA_ESCAPED
        elif data in asciiLetters:
            self.emitter.emit_characters(data)
            self.temporaryBuffer += data
        else:
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA_ESCAPED

    def scriptDataDoubleEscapedState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED_DASH
        elif data == "<":
            self.emitter.emit_characters("<")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
        elif data is EOF:
            self.parseError("eof-in-script-in-script")
            self.emitEOF()
        else:
            self.emitter.emit_characters(data)

    def scriptDataDoubleEscapedDashState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED_DASH_DASH
        elif data == "<":
            self.emitter.emit_characters("<")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED_LESS_THAN_SIGN
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED
        elif data is EOF:
            self.parseError("eof-in-script-in-script")
            self.emitEOF()
        else:
            self.emitter.emit_characters(data)
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED

    def scriptDataDoubleEscapedDashDashState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.emit_characters("-")
        elif data == "<":
            self.emitter.emit_characters("<")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED_LESS_THAN_SIGN
        elif data == ">":
            self.emitter.emit_characters(">")
            self.state = State.SCRIPT_DATA
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.emit_characters("\uFFFD")
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED
        elif data is EOF:
            self.parseError("eof-in-script-in-script")
            self.emitEOF()
        else:
            self.emitter.emit_characters(data)
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED

    def scriptDataDoubleEscapedLessThanSignState(self):
        data = self.stream.char()
        if data == "/":
            self.emitter.emit_characters("/")
            self.temporaryBuffer = ""
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPE_END
        else:
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED

    def scriptDataDoubleEscapeEndState(self):
        data = self.stream.char()
        if data in _scriptEscapeEnd:
            self.emitter.emit_characters(data)
            if self.temporaryBuffer.translate(asciiUpper2Lower) == "script":
                self.state = State.SCRIPT_DATA_ESCAPED
            else:
                self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED
        elif data in asciiLetters:
            self.emitter.emit_characters(data)
            self.temporaryBuffer += data
        else:
            self.stream.unget(data)
            self.state = State.SCRIPT_DATA_DOUBLE_ESCAPED

    # Attributes

    def beforeAttributeNameState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.stream.charsUntil(spaceCharacters, True)
        elif data == ">":
            self.emitCurrentToken()
        elif data == "/":
            self.state = State.SELF_CLOSING_START_TAG
        elif data is EOF:
            self.emitPartialToken("expected-attribute-name-but-got-eof")
        elif data == "=":
            self.parseError("unexpected-equals-sign-before-attribute-name")
            self.emitter.start_attribute()
            self.emitter.append_char(data)
            self.state = State.ATTRIBUTE_NAME
        else:
            self.emitter.start_attribute()
            self.stream.unget(data)
            self.state = State.ATTRIBUTE_NAME

    def attributeNameState(self):
        data = self.stream.char()
        if data == "=":
            self.emitter.finish_attribute_name()
            self.state = State.BEFORE_ATTRIBUTE_VALUE
        elif data in asciiLetters:
            self.emitter.append_char(data + self.stream.charsUntil(asciiLetters, True))
        elif data in spaceCharacters or data in ("/", ">") or data is EOF:
            self.emitter.finish_attribute_name()
            self.stream.unget(data)
            self.state = State.AFTER_ATTRIBUTE_NAME
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        elif data in ("'", '"', "<"):
            self.parseError("invalid-character-in-attribute-name")
            self.emitter.append_char(data)
        else:
            self.emitter.append_char(data)

    def afterAttributeNameState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.stream.charsUntil(spaceCharacters, True)
        elif data == "=":
            self.state = State.BEFORE_ATTRIBUTE_VALUE
        elif data == ">":
            self.emitCurrentToken()
        elif data == "/":
            self.state = State.SELF_CLOSING_START_TAG
        elif data is EOF:
            self.emitPartialToken("expected-end-of-tag-but-got-eof")
        else:
            self.emitter.start_attribute()
            self.stream.unget(data)
            self.state = State.ATTRIBUTE_NAME

    def beforeAttributeValueState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.stream.charsUntil(spaceCharacters, True)
        elif data == "\"":
            self.emitter.start_attribute_value()
            self.state = State.ATTRIBUTE_VALUE_DOUBLE_QUOTED
        elif data == "'":
            self.emitter.start_attribute_value()
            self.state = State.ATTRIBUTE_VALUE_SINGLE_QUOTED
        elif data == ">":
            self.parseError("expected-attribute-value-but-got-right-bracket")
            self.emitCurrentToken()
        else:
            self.emitter.start_attribute_value()
            self.stream.unget(data)
            self.state = State.ATTRIBUTE_VALUE_UNQUOTED

    def _attributeValueQuoted(self, quote, eofCode):
        data = self.stream.char()
        if data == quote:
            self.state = State.AFTER_ATTRIBUTE_VALUE_QUOTED
        elif data == "&":
            self.emitter.append_char(self.entities.consumeEntity(fromAttribute=True))
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        elif data is EOF:
            self.emitPartialToken(eofCode)
        else:
            self.emitter.append_char(data + self.stream.charsUntil((quote, "&", "\u0000")))

    def attributeValueDoubleQuotedState(self):
        self._attributeValueQuoted('"', "eof-in-attribute-value-double-quote")

    def attributeValueSingleQuotedState(self):
        self._attributeValueQuoted("'", "eof-in-attribute-value-single-quote")

    def attributeValueUnQuotedState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.state = State.BEFORE_ATTRIBUTE_NAME
        elif data == "&":
            self.emitter.append_char(self.entities.consumeEntity(fromAttribute=True))
        elif data == ">":
            self.emitCurrentToken()
        elif data in ('"', "'", "=", "<", "`"):
            self.parseError("unexpected-character-in-unquoted-attribute-value")
            self.emitter.append_char(data)
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        elif data is EOF:
            self.emitPartialToken("eof-in-attribute-value-no-quotes")
        else:
            self.emitter.append_char(data + self.stream.charsUntil(_unquotedAttributeEnd))

    def afterAttributeValueState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.state = State.BEFORE_ATTRIBUTE_NAME
        elif data == ">":
            self.emitCurrentToken()
        elif data == "/":
            self.state = State.SELF_CLOSING_START_TAG
        elif data is EOF:
            self.emitPartialToken("unexpected-EOF-after-attribute-value")
        else:
            self.parseError("unexpected-character-after-attribute-value")
            self.stream.unget(data)
            self.state = State.BEFORE_ATTRIBUTE_NAME

    def selfClosingStartTagState(self):
        data = self.stream.char()
        if data == ">":
            self.emitter.set_self_closing()
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("unexpected-EOF-after-solidus-in-tag")
        else:
            self.parseError("unexpected-character-after-solidus-in-tag")
            self.stream.unget(data)
            self.state = State.BEFORE_ATTRIBUTE_NAME

    # Comments

    def bogusCommentState(self):
        # Make a new comment token and give it as value all the characters
        # until the first > or EOF (charsUntil checks for EOF automatically)
        # and emit it.
        data = self.stream.charsUntil(">")
        for _ in range(data.count("\u0000")):
            self.parseError("null-character")
        self.emitter.append_char(data.replace("\u0000", "\uFFFD"))

        # Eat the character directly after the bogus comment which is either a
        # ">" or an EOF.
        if self.stream.char() is EOF:
            self.emitter.emit(self.emitter.finalize())
            self.emitEOF()
        else:
            self.emitCurrentToken()

    def markupDeclarationOpenState(self):
        if self.stream.matchAhead("--"):
            self.emitter.start_comment()
            self.state = State.COMMENT_START
        elif self.stream.matchAhead("DOCTYPE", caseInsensitive=True):
            self.emitter.start_doctype()
            self.state = State.DOCTYPE
        elif self.stream.matchAhead("[CDATA["):
            self.parseError("cdata-in-html-content")
            self.emitter.start_comment("[CDATA[")
            self.state = State.BOGUS_COMMENT
        else:
            self.parseError("expected-dashes-or-doctype")
            self.emitter.start_comment()
            self.state = State.BOGUS_COMMENT

    def commentStartState(self):
        data = self.stream.char()
        if data == "-":
            self.state = State.COMMENT_START_DASH
        elif data == ">":
            self.parseError("incorrect-comment")
            self.emitCurrentToken()
        else:
            self.stream.unget(data)
            self.state = State.COMMENT

    def commentStartDashState(self):
        data = self.stream.char()
        if data == "-":
            self.state = State.COMMENT_END
        elif data == ">":
            self.parseError("incorrect-comment")
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-comment")
        else:
            self.emitter.append_char("-")
            self.stream.unget(data)
            self.state = State.COMMENT

    def commentState(self):
        data = self.stream.char()
        if data == "-":
            self.state = State.COMMENT_END_DASH
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        elif data is EOF:
            self.emitPartialToken("eof-in-comment")
        else:
            self.emitter.append_char(data + self.stream.charsUntil(("-", "\u0000")))

    def commentEndDashState(self):
        data = self.stream.char()
        if data == "-":
            self.state = State.COMMENT_END
        elif data is EOF:
            self.emitPartialToken("eof-in-comment-end-dash")
        else:
            self.emitter.append_char("-")
            self.stream.unget(data)
            self.state = State.COMMENT

    def commentEndState(self):
        data = self.stream.char()
        if data == ">":
            self.emitCurrentToken()
        elif data == "!":
            self.state = State.COMMENT_END_BANG
        elif data == "-":
            self.emitter.append_char("-")
        elif data is EOF:
            self.emitPartialToken("eof-in-comment-double-dash")
        else:
            self.emitter.append_char("--")
            self.stream.unget(data)
            self.state = State.COMMENT

    def commentEndBangState(self):
        data = self.stream.char()
        if data == "-":
            self.emitter.append_char("--!")
            self.state = State.COMMENT_END_DASH
        elif data == ">":
            self.parseError("incorrectly-closed-comment")
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-comment-end-bang-state")
        else:
            self.emitter.append_char("--!")
            self.stream.unget(data)
            self.state = State.COMMENT

    # DOCTYPEs

    def doctypeState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.state = State.BEFORE_DOCTYPE_NAME
        elif data == ">":
            self.stream.unget(data)
            self.state = State.BEFORE_DOCTYPE_NAME
        elif data is EOF:
            self.emitPartialToken("expected-doctype-name-but-got-eof", forceQuirks=True)
        else:
            self.parseError("need-space-after-doctype")
            self.stream.unget(data)
            self.state = State.BEFORE_DOCTYPE_NAME

    def beforeDoctypeNameState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.parseError("expected-doctype-name-but-got-right-bracket")
            self.emitter.set_force_quirks()
            self.emitCurrentToken()
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
            self.state = State.DOCTYPE_NAME
        elif data is EOF:
            self.emitPartialToken("expected-doctype-name-but-got-eof", forceQuirks=True)
        else:
            self.emitter.append_char(data)
            self.state = State.DOCTYPE_NAME

    def doctypeNameState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.emitter.stop_doctype_name()
            self.state = State.AFTER_DOCTYPE_NAME
        elif data == ">":
            self.emitCurrentToken()
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype-name", forceQuirks=True)
        else:
            self.emitter.append_char(data)

    def afterDoctypeNameState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.stream.unget(data)
            if self.stream.matchAhead("PUBLIC", caseInsensitive=True):
                self.state = State.AFTER_DOCTYPE_PUBLIC_KEYWORD
            elif self.stream.matchAhead("SYSTEM", caseInsensitive=True):
                self.state = State.AFTER_DOCTYPE_SYSTEM_KEYWORD
            else:
                # Errors point just past the unexpected character
                self.stream.char()
                self.parseError("expected-space-or-right-bracket-in-doctype",
                                {"data": data})
                self.emitter.set_force_quirks()
                self.stream.unget(data)
                self.state = State.BOGUS_DOCTYPE

    def _afterDoctypeKeyword(self, beforeIdentifierState, startIdentifier,
                             doubleQuotedState, singleQuotedState):
        data = self.stream.char()
        if data in spaceCharacters:
            self.state = beforeIdentifierState
        elif data in ("'", '"'):
            self.parseError("unexpected-char-in-doctype")
            startIdentifier()
            self.state = doubleQuotedState if data == '"' else singleQuotedState
        elif data == ">":
            self.parseError("unexpected-end-of-doctype")
            self.emitter.set_force_quirks()
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.parseError("unexpected-char-in-doctype")
            self.emitter.set_force_quirks()
            self.stream.unget(data)
            self.state = State.BOGUS_DOCTYPE

    def _beforeDoctypeIdentifier(self, startIdentifier, doubleQuotedState, singleQuotedState):
        data = self.stream.char()
        if data in spaceCharacters:
            pass
        elif data in ("'", '"'):
            startIdentifier()
            self.state = doubleQuotedState if data == '"' else singleQuotedState
        elif data == ">":
            self.parseError("unexpected-end-of-doctype")
            self.emitter.set_force_quirks()
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.parseError("unexpected-char-in-doctype")
            self.emitter.set_force_quirks()
            self.stream.unget(data)
            self.state = State.BOGUS_DOCTYPE

    def _doctypeIdentifierQuoted(self, quote, afterIdentifierState):
        data = self.stream.char()
        if data == quote:
            self.state = afterIdentifierState
        elif data == "\u0000":
            self.parseError("null-character")
            self.emitter.append_char("\uFFFD")
        elif data == ">":
            self.parseError("unexpected-end-of-doctype")
            self.emitter.set_force_quirks()
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.emitter.append_char(data + self.stream.charsUntil((quote, ">", "\u0000")))

    def afterDoctypePublicKeywordState(self):
        self._afterDoctypeKeyword(State.BEFORE_DOCTYPE_PUBLIC_IDENTIFIER,
                                  self.emitter.start_public_identifier,
                                  State.DOCTYPE_PUBLIC_IDENTIFIER_DOUBLE_QUOTED,
                                  State.DOCTYPE_PUBLIC_IDENTIFIER_SINGLE_QUOTED)

    def beforeDoctypePublicIdentifierState(self):
        self._beforeDoctypeIdentifier(self.emitter.start_public_identifier,
                                      State.DOCTYPE_PUBLIC_IDENTIFIER_DOUBLE_QUOTED,
                                      State.DOCTYPE_PUBLIC_IDENTIFIER_SINGLE_QUOTED)

    def doctypePublicIdentifierDoubleQuotedState(self):
        self._doctypeIdentifierQuoted('"', State.AFTER_DOCTYPE_PUBLIC_IDENTIFIER)

    def doctypePublicIdentifierSingleQuotedState(self):
        self._doctypeIdentifierQuoted("'", State.AFTER_DOCTYPE_PUBLIC_IDENTIFIER)

    def afterDoctypePublicIdentifierState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            self.state = State.BETWEEN_DOCTYPE_PUBLIC_AND_SYSTEM_IDENTIFIERS
        elif data == ">":
            self.emitCurrentToken()
        elif data in ("'", '"'):
            self.parseError("unexpected-char-in-doctype")
            self.emitter.start_system_identifier()
            if data == '"':
                self.state = State.DOCTYPE_SYSTEM_IDENTIFIER_DOUBLE_QUOTED
            else:
                self.state = State.DOCTYPE_SYSTEM_IDENTIFIER_SINGLE_QUOTED
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.parseError("unexpected-char-in-doctype")
            self.emitter.set_force_quirks()
            self.stream.unget(data)
            self.state = State.BOGUS_DOCTYPE

    def betweenDoctypePublicAndSystemIdentifiersState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitCurrentToken()
        elif data in ("'", '"'):
            self.emitter.start_system_identifier()
            if data == '"':
                self.state = State.DOCTYPE_SYSTEM_IDENTIFIER_DOUBLE_QUOTED
            else:
                self.state = State.DOCTYPE_SYSTEM_IDENTIFIER_SINGLE_QUOTED
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.parseError("unexpected-char-in-doctype")
            self.emitter.set_force_quirks()
            self.stream.unget(data)
            self.state = State.BOGUS_DOCTYPE

    def afterDoctypeSystemKeywordState(self):
        self._afterDoctypeKeyword(State.BEFORE_DOCTYPE_SYSTEM_IDENTIFIER,
                                  self.emitter.start_system_identifier,
                                  State.DOCTYPE_SYSTEM_IDENTIFIER_DOUBLE_QUOTED,
                                  State.DOCTYPE_SYSTEM_IDENTIFIER_SINGLE_QUOTED)

    def beforeDoctypeSystemIdentifierState(self):
        self._beforeDoctypeIdentifier(self.emitter.start_system_identifier,
                                      State.DOCTYPE_SYSTEM_IDENTIFIER_DOUBLE_QUOTED,
                                      State.DOCTYPE_SYSTEM_IDENTIFIER_SINGLE_QUOTED)

    def doctypeSystemIdentifierDoubleQuotedState(self):
        self._doctypeIdentifierQuoted('"', State.AFTER_DOCTYPE_SYSTEM_IDENTIFIER)

    def doctypeSystemIdentifierSingleQuotedState(self):
        self._doctypeIdentifierQuoted("'", State.AFTER_DOCTYPE_SYSTEM_IDENTIFIER)

    def afterDoctypeSystemIdentifierState(self):
        data = self.stream.char()
        if data in spaceCharacters:
            pass
        elif data == ">":
            self.emitCurrentToken()
        elif data is EOF:
            self.emitPartialToken("eof-in-doctype", forceQuirks=True)
        else:
            self.parseError("unexpected-char-in-doctype")
            self.stream.unget(data)
            self.state = State.BOGUS_DOCTYPE

    def bogusDoctypeState(self):
        data = self.stream.char()
        if data == ">":
            self.emitCurrentToken()
        elif data is EOF:
            self.emitter.emit(self.emitter.finalize())
            self.emitEOF()
        elif data == "\u0000":
            self.parseError("null-character")


def tokenize(source, **kwargs):
    """Yield the tokens of ``source``, a string, bytes or a file object.

    Keyword arguments are passed to :class:`HTMLTokenizer`.

    >>> [t.name for t in tokenize("<p class=x>hi</p>") if hasattr(t, "name")]
    ['p', 'p']
    """
    return iter(HTMLTokenizer(source, **kwargs))
