"""
Token tree classes: identifiers, punctuation, literals and delimited groups.
"""

from typing import Iterable, List, Optional

from .token_types import Delimiter, LiteralKind, Spacing


class TokenTree:
    """Base class for every token, carrying its source position."""

    def __init__(self, line: Optional[int] = None, column: Optional[int] = None,
                 filename: Optional[str] = None):
        self.line = line
        self.column = column
        self.filename = filename

    def located_like(self, other: Optional['TokenTree']) -> 'TokenTree':
        """Copy the source position of another token onto this one."""
        if other is not None:
            self.line = other.line
            self.column = other.column
            self.filename = other.filename
        return self

    def is_punct(self, char: str) -> bool:
        return False

    def is_group(self, delimiter: Optional[Delimiter] = None) -> bool:
        return False

    def __repr__(self):
        return f"{self.__class__.__name__}({str(self)!r}, {self.line}:{self.column})"


class Ident(TokenTree):
    """An identifier or keyword, optionally carrying the `r#` raw marker."""

    def __init__(self, name: str, raw: bool = False, line=None, column=None, filename=None):
        super().__init__(line, column, filename)
        self.name = name
        self.raw = raw

    def __str__(self):
        return f"r#{self.name}" if self.raw else self.name

    def __eq__(self, other):
        if not isinstance(other, Ident):
            return NotImplemented
        return self.name == other.name and self.raw == other.raw

    __hash__ = None


class Punct(TokenTree):
    """A single punctuation character."""

    def __init__(self, char: str, spacing: Spacing = Spacing.ALONE,
                 line=None, column=None, filename=None):
        super().__init__(line, column, filename)
        self.char = char
        self.spacing = spacing

    def is_punct(self, char: str) -> bool:
        return self.char == char

    def __str__(self):
        return self.char

    def __eq__(self, other):
        if not isinstance(other, Punct):
            return NotImplemented
        return self.char == other.char

    __hash__ = None


class Literal(TokenTree):
    """
    A typed literal.

    `value` holds the decoded textual value (string contents, base-10 digits,
    `true`/`false`) and `text` the source representation used for rendering.
    """

    def __init__(self, kind: LiteralKind, value: str, text: Optional[str] = None,
                 suffix: str = "", line=None, column=None, filename=None):
        super().__init__(line, column, filename)
        self.kind = kind
        self.value = value
        self.text = text if text is not None else value
        self.suffix = suffix

    @classmethod
    def string(cls, value: str) -> 'Literal':
        """Build a plain double-quoted string literal."""
        return cls(LiteralKind.STRING, value, f'"{escape_string(value)}"')

    @classmethod
    def raw_string(cls, value: str) -> 'Literal':
        """Build a raw string literal fenced with the shortest unused `#` run."""
        fence = raw_fence(value)
        return cls(LiteralKind.STRING, value, f'r{fence}"{value}"{fence}')

    @classmethod
    def integer(cls, number: int) -> 'Literal':
        return cls(LiteralKind.INTEGER, str(number))

    @classmethod
    def boolean(cls, flag: bool) -> 'Literal':
        return cls(LiteralKind.BOOLEAN, "true" if flag else "false")

    def is_string(self) -> bool:
        return self.kind == LiteralKind.STRING

    def is_bytes(self) -> bool:
        return self.kind in (LiteralKind.BYTE, LiteralKind.BYTE_STRING)

    def __str__(self):
        return self.text

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return (self.kind, self.value, self.suffix) == (other.kind, other.value, other.suffix)

    __hash__ = None


class Group(TokenTree):
    """A delimited, ordered sequence of child tokens."""

    def __init__(self, delimiter: Delimiter, tokens: Iterable[TokenTree],
                 line=None, column=None, filename=None):
        super().__init__(line, column, filename)
        self.delimiter = delimiter
        self.tokens = list(tokens)

    def is_group(self, delimiter: Optional[Delimiter] = None) -> bool:
        return delimiter is None or self.delimiter == delimiter

    def __str__(self):
        inner = render(self.tokens)
        if self.delimiter == Delimiter.PARENTHESIS:
            return f"({inner})"
        if self.delimiter == Delimiter.BRACKET:
            return f"[{inner}]"
        if self.delimiter == Delimiter.BRACE:
            return f"{{ {inner} }}" if inner else "{}"
        return inner

    def __eq__(self, other):
        if not isinstance(other, Group):
            return NotImplemented
        return self.delimiter == other.delimiter and self.tokens == other.tokens

    __hash__ = None


def render(tokens: Iterable[TokenTree]) -> str:
    """
    Render a token sequence to its canonical text.

    Tokens are separated by a single space, except after joint punctuation.
    """
    parts = []
    joint = False
    for index, token in enumerate(tokens):
        if index and not joint:
            parts.append(" ")
        joint = isinstance(token, Punct) and token.spacing == Spacing.JOINT
        parts.append(str(token))
    return "".join(parts)


def escape_string(value: str) -> str:
    """Escape a string value for a double-quoted literal."""
    escaped = []
    for char in value:
        if char == '\\':
            escaped.append('\\\\')
        elif char == '"':
            escaped.append('\\"')
        elif char == '\n':
            escaped.append('\\n')
        elif char == '\t':
            escaped.append('\\t')
        elif char == '\r':
            escaped.append('\\r')
        elif char == '\0':
            escaped.append('\\0')
        else:
            escaped.append(char)
    return "".join(escaped)


def raw_fence(text: str) -> str:
    """Return the shortest run of `#` that does not occur in `text`."""
    fence = "#"
    while fence in text:
        fence += "#"
    return fence


def first_token(tokens: List[TokenTree]) -> Optional[TokenTree]:
    """First token of a sequence, used to anchor generated tokens and errors."""
    return tokens[0] if tokens else None
