"""
Token classification for the tokel token model.
"""

from enum import Enum, auto


class Delimiter(Enum):
    PARENTHESIS = auto()
    BRACKET = auto()
    BRACE = auto()
    # Invisible group, produced only by transforms
    NONE = auto()


class Spacing(Enum):
    # Followed by whitespace or a non-punctuation token
    ALONE = auto()
    # Immediately followed by another punctuation character
    JOINT = auto()


class LiteralKind(Enum):
    STRING = auto()
    CHAR = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    BYTE = auto()
    BYTE_STRING = auto()
    VERBATIM = auto()


# Opening and closing characters for every visible delimiter
OPEN_DELIMITERS = {
    '(': Delimiter.PARENTHESIS,
    '[': Delimiter.BRACKET,
    '{': Delimiter.BRACE,
}

CLOSE_DELIMITERS = {
    ')': Delimiter.PARENTHESIS,
    ']': Delimiter.BRACKET,
    '}': Delimiter.BRACE,
}

# Characters that lex as single punctuation tokens
PUNCT_CHARS = frozenset("~!@#$%^&*-=+|;:,.<>/?'")
