import html.entities
import string

EOF = None

E = {
    "null-character":
        "Null character in input stream, replaced with U+FFFD.",
    "invalid-codepoint":
        "Invalid codepoint in stream.",
    "null-character-reference":
        "Numeric entity refers to U+0000, replaced with U+FFFD.",
    "illegal-windows-1252-entity":
        "Entity used with illegal number (windows-1252 reference): "
        "U+%(charAsInt)08x.",
    "control-character-reference":
        "Numeric entity refers to a control character: U+%(charAsInt)08x.",
    "illegal-codepoint-for-numeric-entity":
        "Numeric entity represents an illegal codepoint: "
        "U+%(charAsInt)08x.",
    "numeric-entity-without-semicolon":
        "Numeric entity didn't end with ';'.",
    "expected-numeric-entity":
        "Numeric entity expected but none found.",
    "named-entity-without-semicolon":
        "Named entity didn't end with ';'.",
    "expected-named-entity":
        "Named entity expected. Got none.",
    "attributes-in-end-tag":
        "End tag contains unexpected attributes.",
    "self-closing-flag-on-end-tag":
        "End tag contains unexpected self-closing flag.",
    "eof-before-tag-name":
        "Unexpected end of file. Expected tag name.",
    "expected-tag-name-but-got-question-mark":
        "Expected tag name. Got '?' instead. (HTML doesn't "
        "support processing instructions.)",
    "expected-tag-name":
        "Expected tag name. Got something else instead.",
    "expected-closing-tag-but-got-right-bracket":
        "Expected closing tag. Got '>' instead. Ignoring '</>'.",
    "expected-closing-tag-but-got-eof":
        "Expected closing tag. Unexpected end of file.",
    "expected-closing-tag-but-got-char":
        "Expected closing tag. Unexpected character '%(data)s' found.",
    "eof-in-tag-name":
        "Unexpected end of file in the tag name.",
    "expected-attribute-name-but-got-eof":
        "Unexpected end of file. Expected attribute name instead.",
    "unexpected-equals-sign-before-attribute-name":
        "Unexpected '=' before attribute name.",
    "invalid-character-in-attribute-name":
        "Invalid character in attribute name.",
    "duplicate-attribute":
        "Dropped duplicate attribute '%(name)s' on tag.",
    "expected-end-of-tag-but-got-eof":
        "Unexpected end of file. Expected = or end of tag.",
    "expected-attribute-value-but-got-right-bracket":
        "Expected attribute value. Got '>' instead.",
    "eof-in-attribute-value-double-quote":
        "Unexpected end of file in attribute value (\").",
    "eof-in-attribute-value-single-quote":
        "Unexpected end of file in attribute value (').",
    "eof-in-attribute-value-no-quotes":
        "Unexpected end of file in attribute value.",
    "unexpected-character-in-unquoted-attribute-value":
        "Unexpected character in unquoted attribute.",
    "unexpected-EOF-after-attribute-value":
        "Unexpected end of file in tag. Expected >.",
    "unexpected-character-after-attribute-value":
        "Unexpected character after attribute value.",
    "unexpected-EOF-after-solidus-in-tag":
        "Unexpected end of file in tag. Expected >.",
    "unexpected-character-after-solidus-in-tag":
        "Unexpected character after / in tag. Expected >.",
    "expected-dashes-or-doctype":
        "Expected '--' or 'DOCTYPE'. Not found.",
    "cdata-in-html-content":
        "CDATA section outside foreign content, treated as a bogus comment.",
    "incorrect-comment":
        "Incorrect comment.",
    "eof-in-comment":
        "Unexpected end of file in comment.",
    "eof-in-comment-end-dash":
        "Unexpected end of file in comment (-).",
    "eof-in-comment-double-dash":
        "Unexpected end of file in comment (--).",
    "incorrectly-closed-comment":
        "Comment closed with '--!>'.",
    "eof-in-comment-end-bang-state":
        "Unexpected end of file in comment.",
    "eof-in-script-html-comment-like-text":
        "Unexpected end of file in script comment-like text.",
    "eof-in-script-in-script":
        "Unexpected end of file in double escaped script text.",
    "need-space-after-doctype":
        "No space after literal string 'DOCTYPE'.",
    "expected-doctype-name-but-got-right-bracket":
        "Unexpected > character. Expected DOCTYPE name.",
    "expected-doctype-name-but-got-eof":
        "Unexpected end of file. Expected DOCTYPE name.",
    "eof-in-doctype-name":
        "Unexpected end of file in DOCTYPE name.",
    "eof-in-doctype":
        "Unexpected end of file in DOCTYPE.",
    "expected-space-or-right-bracket-in-doctype":
        "Expected space or '>'. Got '%(data)s'.",
    "unexpected-end-of-doctype":
        "Unexpected end of DOCTYPE.",
    "unexpected-char-in-doctype":
        "Unexpected character in DOCTYPE.",
}

spaceCharacters = frozenset((
    "\t",
    "\n",
    "\u000C",
    " ",
    "\r"
))

asciiUppercase = frozenset(string.ascii_uppercase)
asciiLetters = frozenset(string.ascii_letters)
digits = frozenset(string.digits)
hexDigits = frozenset(string.hexdigits)
asciiAlphanumeric = asciiLetters | digits

asciiUpper2Lower = dict([(ord(c), ord(c.lower()))
                         for c in string.ascii_uppercase])

# Named character references, with and without the trailing semicolon
# for the legacy names that may omit it
entities = html.entities.html5

# Numeric references in the C1 range that browsers read as windows-1252
replacementCharacters = {
    0x80: "€",
    0x82: "‚",
    0x83: "ƒ",
    0x84: "„",
    0x85: "…",
    0x86: "†",
    0x87: "‡",
    0x88: "ˆ",
    0x89: "‰",
    0x8A: "Š",
    0x8B: "‹",
    0x8C: "Œ",
    0x8E: "Ž",
    0x91: "‘",
    0x92: "’",
    0x93: "“",
    0x94: "”",
    0x95: "•",
    0x96: "–",
    0x97: "—",
    0x98: "˜",
    0x99: "™",
    0x9A: "š",
    0x9B: "›",
    0x9C: "œ",
    0x9E: "ž",
    0x9F: "Ÿ",
}

# Content models selected by the start tag of a raw text element
rawtextElements = {
    "title": "RCDATA",
    "textarea": "RCDATA",
    "style": "RAWTEXT",
    "xmp": "RAWTEXT",
    "iframe": "RAWTEXT",
    "noembed": "RAWTEXT",
    "noframes": "RAWTEXT",
    "script": "SCRIPT_DATA",
    "plaintext": "PLAINTEXT",
}

# Only a raw text element when scripting is enabled
scriptingRawtextElements = {
    "noscript": "RAWTEXT",
}

voidElements = frozenset((
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
))

# Elements whose text content is serialized without escaping
rcdataElements = frozenset((
    "style",
    "script",
    "xmp",
    "iframe",
    "noembed",
    "noframes",
    "plaintext",
))

booleanAttributes = {
    "": frozenset(("irrelevant", "itemscope")),
    "style": frozenset(("scoped",)),
    "img": frozenset(("ismap",)),
    "audio": frozenset(("autoplay", "controls")),
    "video": frozenset(("autoplay", "controls")),
    "script": frozenset(("defer", "async")),
    "details": frozenset(("open",)),
    "datagrid": frozenset(("multiple", "disabled")),
    "command": frozenset(("hidden", "disabled", "checked", "default")),
    "hr": frozenset(("noshade",)),
    "menu": frozenset(("autosubmit",)),
    "fieldset": frozenset(("disabled", "readonly")),
    "option": frozenset(("disabled", "readonly", "selected")),
    "optgroup": frozenset(("disabled", "readonly")),
    "button": frozenset(("disabled", "autofocus")),
    "input": frozenset(("disabled", "readonly", "required", "autofocus", "checked", "ismap")),
    "select": frozenset(("disabled", "readonly", "autofocus", "multiple")),
    "output": frozenset(("disabled", "readonly")),
    "iframe": frozenset(("seamless",)),
}
