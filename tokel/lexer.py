"""
Lexical analyzer for tokel.
Turns source text into a token tree with position information.
"""

from typing import List, Optional

from .errors import LexerError
from .token import Group, Ident, Literal, Punct, TokenTree
from .token_types import CLOSE_DELIMITERS, OPEN_DELIMITERS, PUNCT_CHARS, LiteralKind, Spacing

SIMPLE_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '0': '\0',
    "'": "'",
    '"': '"',
}

DIGITS_BY_BASE = {
    2: "01",
    8: "01234567",
    10: "0123456789",
    16: "0123456789abcdefABCDEF",
}


def is_ident_start(char: Optional[str]) -> bool:
    return char is not None and (char.isalpha() or char == '_')


def is_ident_continue(char: Optional[str]) -> bool:
    return char is not None and (char.isalnum() or char == '_')


class Lexer:
    """
    Lexical analyzer for the Rust-flavoured token syntax tokel rewrites.
    Delimiters are matched while lexing, so the result is a token tree.
    """

    def __init__(self, source_code: str, filename: Optional[str] = None,
                 line: int = 1, column: int = 1):
        self.source = source_code
        self.filename = filename
        self.position = 0
        self.line = line
        self.column = column

    def current_char(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def peek_char(self, offset: int = 1) -> Optional[str]:
        """Peek at character at current position + offset."""
        pos = self.position + offset
        if pos >= len(self.source):
            return None
        return self.source[pos]

    def advance(self) -> Optional[str]:
        """Advance position and return current character."""
        if self.position >= len(self.source):
            return None

        char = self.source[self.position]
        self.position += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def error(self, message: str, line: int, column: int) -> LexerError:
        return LexerError(message, line, column, self.filename)

    def skip_trivia(self):
        """Skip whitespace and comments."""
        while True:
            char = self.current_char()
            if char is not None and char.isspace():
                self.advance()
            elif char == '/' and self.peek_char() == '/':
                while self.current_char() and self.current_char() != '\n':
                    self.advance()
            elif char == '/' and self.peek_char() == '*':
                self.skip_block_comment()
            else:
                return

    def skip_block_comment(self):
        """Skip a (possibly nested) block comment."""
        start_line, start_column = self.line, self.column
        depth = 0
        while True:
            char = self.current_char()
            if char is None:
                raise self.error("Unterminated block comment", start_line, start_column)
            if char == '/' and self.peek_char() == '*':
                depth += 1
                self.advance()
            elif char == '*' and self.peek_char() == '/':
                depth -= 1
                self.advance()
                if depth == 0:
                    self.advance()
                    return
            self.advance()

    def read_escape(self, start_line: int, start_column: int) -> str:
        """Read an escape sequence; the backslash is the current character."""
        self.advance()
        char = self.current_char()

        if char in SIMPLE_ESCAPES:
            self.advance()
            return SIMPLE_ESCAPES[char]

        if char == 'x':
            self.advance()
            digits = ""
            for _ in range(2):
                if self.current_char() is None or self.current_char() not in DIGITS_BY_BASE[16]:
                    raise self.error("Invalid \\x escape", start_line, start_column)
                digits += self.advance()
            return chr(int(digits, 16))

        if char == 'u' and self.peek_char() == '{':
            self.advance()
            self.advance()
            digits = ""
            while self.current_char() and self.current_char() != '}':
                digits += self.advance()
            if self.current_char() != '}' or not digits:
                raise self.error("Invalid \\u{...} escape", start_line, start_column)
            self.advance()
            try:
                return chr(int(digits.replace('_', ''), 16))
            except ValueError:
                raise self.error(f"Invalid unicode escape: {digits}", start_line, start_column)

        if char == '\n':
            # Line continuation: skip the newline and leading whitespace
            while self.current_char() is not None and self.current_char().isspace():
                self.advance()
            return ""

        raise self.error(f"Unknown escape sequence: \\{char or ''}", start_line, start_column)

    def read_quoted(self, quote_char: str, start_line: int, start_column: int) -> str:
        """Read a quoted body with escapes; the opening quote is current."""
        value = ""
        self.advance()  # Skip opening quote

        while self.current_char() is not None and self.current_char() != quote_char:
            if self.current_char() == '\\':
                value += self.read_escape(start_line, start_column)
            else:
                value += self.advance()

        if self.current_char() != quote_char:
            kind = "string" if quote_char == '"' else "character"
            raise self.error(f"Unterminated {kind} literal", start_line, start_column)

        self.advance()  # Skip closing quote
        return value

    def read_raw(self, start_line: int, start_column: int) -> str:
        """Read a raw string body; the current character is the first `#` or `"`."""
        hashes = 0
        while self.current_char() == '#':
            hashes += 1
            self.advance()

        if self.current_char() != '"':
            raise self.error("Expected '\"' in raw string literal", start_line, start_column)
        self.advance()

        terminator = '"' + '#' * hashes
        end = self.source.find(terminator, self.position)
        if end == -1:
            raise self.error("Unterminated raw string literal", start_line, start_column)

        value = self.source[self.position:end]
        while self.position < end + len(terminator):
            self.advance()
        return value

    def read_suffix(self) -> str:
        suffix = ""
        if is_ident_start(self.current_char()):
            while is_ident_continue(self.current_char()):
                suffix += self.advance()
        return suffix

    def read_number(self, start_line: int, start_column: int) -> Literal:
        """Read an integer or float literal, with optional base prefix and suffix."""
        start = self.position
        base = 10
        if self.current_char() == '0' and self.peek_char() in ('x', 'o', 'b'):
            base = {'x': 16, 'o': 8, 'b': 2}[self.peek_char()]
            self.advance()
            self.advance()

        digits = ""
        while self.current_char() is not None and (
                self.current_char() in DIGITS_BY_BASE[base] or self.current_char() == '_'):
            digits += self.advance()

        is_float = False
        if base == 10:
            if self.current_char() == '.' and (self.peek_char() or '').isdigit():
                is_float = True
                digits += self.advance()
                while self.current_char() is not None and (
                        self.current_char().isdigit() or self.current_char() == '_'):
                    digits += self.advance()

            if self.current_char() in ('e', 'E'):
                sign = self.peek_char()
                exponent_digit = self.peek_char(2) if sign in ('+', '-') else sign
                if exponent_digit is not None and exponent_digit.isdigit():
                    is_float = True
                    digits += self.advance()
                    if self.current_char() in ('+', '-'):
                        digits += self.advance()
                    while self.current_char() is not None and (
                            self.current_char().isdigit() or self.current_char() == '_'):
                        digits += self.advance()

        digits = digits.replace('_', '')
        if not digits:
            raise self.error("Missing digits after base prefix", start_line, start_column)

        suffix = self.read_suffix()
        if suffix in ('f32', 'f64') and base == 10:
            is_float = True

        text = self.source[start:self.position]
        if is_float:
            return Literal(LiteralKind.FLOAT, digits, text, suffix,
                           start_line, start_column, self.filename)
        return Literal(LiteralKind.INTEGER, str(int(digits, base)), text, suffix,
                       start_line, start_column, self.filename)

    def read_identifier(self) -> str:
        value = ""
        while is_ident_continue(self.current_char()):
            value += self.advance()
        return value

    def read_word(self, start_line: int, start_column: int) -> TokenTree:
        """Read an identifier, keyword literal or prefixed literal (r"", b'', br"", c"")."""
        start = self.position
        char = self.current_char()
        following = self.peek_char()

        def literal(kind, value):
            return Literal(kind, value, self.source[start:self.position], "",
                           start_line, start_column, self.filename)

        if char == 'r' and following == '#' and is_ident_start(self.peek_char(2)):
            self.advance()
            self.advance()
            return Ident(self.read_identifier(), True, start_line, start_column, self.filename)

        if char == 'r' and following in ('"', '#'):
            self.advance()
            return literal(LiteralKind.STRING, self.read_raw(start_line, start_column))

        if char == 'b' and following == "'":
            self.advance()
            return literal(LiteralKind.BYTE, self.read_quoted("'", start_line, start_column))

        if char == 'b' and following == '"':
            self.advance()
            return literal(LiteralKind.BYTE_STRING, self.read_quoted('"', start_line, start_column))

        if char == 'b' and following == 'r' and self.peek_char(2) in ('"', '#'):
            self.advance()
            self.advance()
            return literal(LiteralKind.BYTE_STRING, self.read_raw(start_line, start_column))

        if char == 'c' and following == '"':
            self.advance()
            self.read_quoted('"', start_line, start_column)
            text = self.source[start:self.position]
            return Literal(LiteralKind.VERBATIM, text, text, "",
                           start_line, start_column, self.filename)

        name = self.read_identifier()
        if name in ('true', 'false'):
            return Literal(LiteralKind.BOOLEAN, name, name, "",
                           start_line, start_column, self.filename)
        return Ident(name, False, start_line, start_column, self.filename)

    def read_quote(self, start_line: int, start_column: int) -> TokenTree:
        """Read a character literal, or the quote punct that starts a lifetime."""
        following = self.peek_char()
        if following == '\\' or (following is not None and self.peek_char(2) == "'"):
            start = self.position
            value = self.read_quoted("'", start_line, start_column)
            if len(value) != 1:
                raise self.error("Character literal must contain one character",
                                 start_line, start_column)
            return Literal(LiteralKind.CHAR, value, self.source[start:self.position],
                           "", start_line, start_column, self.filename)

        self.advance()
        return Punct("'", Spacing.JOINT, start_line, start_column, self.filename)

    def tokenize(self) -> List[TokenTree]:
        """
        Tokenize the entire source code.
        Returns the top-level token sequence; nested groups hold their children.
        """
        tokens: List[TokenTree] = []
        # Open groups: (opening char, group, enclosing token list)
        stack = []

        while True:
            self.skip_trivia()

            char = self.current_char()
            if char is None:
                break

            start_line = self.line
            start_column = self.column

            if char in OPEN_DELIMITERS:
                group = Group(OPEN_DELIMITERS[char], [], start_line, start_column, self.filename)
                stack.append((char, group, tokens))
                tokens = group.tokens
                self.advance()

            elif char in CLOSE_DELIMITERS:
                if not stack or stack[-1][1].delimiter != CLOSE_DELIMITERS[char]:
                    raise self.error(f"Unexpected closing delimiter: '{char}'",
                                     start_line, start_column)
                _, group, tokens = stack.pop()
                tokens.append(group)
                self.advance()

            elif char == '"':
                start = self.position
                value = self.read_quoted('"', start_line, start_column)
                tokens.append(Literal(LiteralKind.STRING, value, self.source[start:self.position],
                                      "", start_line, start_column, self.filename))

            elif char == "'":
                tokens.append(self.read_quote(start_line, start_column))

            elif char.isdigit():
                tokens.append(self.read_number(start_line, start_column))

            elif is_ident_start(char):
                tokens.append(self.read_word(start_line, start_column))

            elif char in PUNCT_CHARS:
                self.advance()
                following = self.current_char()
                spacing = Spacing.JOINT if following is not None and following in PUNCT_CHARS \
                    else Spacing.ALONE
                tokens.append(Punct(char, spacing, start_line, start_column, self.filename))

            else:
                raise self.error(f"Unexpected character: '{char}'", start_line, start_column)

        if stack:
            opening, group, _ = stack[-1]
            raise self.error(f"Unclosed delimiter: '{opening}'", group.line, group.column)

        return tokens


def tokenize(source: str, filename: Optional[str] = None) -> List[TokenTree]:
    """Tokenize `source` into a token tree."""
    return Lexer(source, filename).tokenize()


def reparse(text: str, anchor: Optional[TokenTree] = None) -> List[TokenTree]:
    """
    Re-tokenize text produced by a transform.

    Positions and errors are reported relative to the anchor token.
    """
    if anchor is None or anchor.line is None:
        return Lexer(text).tokenize()
    return Lexer(text, anchor.filename, anchor.line, anchor.column or 1).tokenize()
