"""
Token cursor used by the block, segment and chain parsers.
"""

from typing import List, Optional

from .errors import ParseError
from .token import Group, Ident, Punct, TokenTree
from .token_types import Delimiter


class TokenCursor:
    """
    Recursive descent helper over a flat token sequence.

    Groups are single tokens here; parsers descend into them by creating a
    new cursor over the group's children.
    """

    def __init__(self, tokens: List[TokenTree], anchor: Optional[TokenTree] = None):
        self.tokens = tokens
        self.current = 0
        # Token used to locate errors raised at end of input
        self.anchor = anchor

    def is_at_end(self) -> bool:
        """Check if we're at the end of tokens."""
        return self.current >= len(self.tokens)

    def peek(self, offset: int = 0) -> Optional[TokenTree]:
        """Get the token `offset` positions ahead without advancing."""
        pos = self.current + offset
        if pos >= len(self.tokens):
            return None
        return self.tokens[pos]

    def previous(self) -> TokenTree:
        """Get previous token."""
        return self.tokens[self.current - 1]

    def advance(self) -> TokenTree:
        """Consume current token and return it."""
        if self.is_at_end():
            raise self.error("Unexpected end of input.")
        self.current += 1
        return self.previous()

    def remaining(self) -> List[TokenTree]:
        return self.tokens[self.current:]

    def check_punct(self, char: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.is_punct(char)

    def check_ident(self, offset: int = 0) -> bool:
        return isinstance(self.peek(offset), Ident)

    def check_group(self, delimiter: Delimiter, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.is_group(delimiter)

    def check_chain(self) -> bool:
        """Check for the `:` + identifier pair that starts a transform chain."""
        return self.check_punct(':') and self.check_ident(1)

    def consume_punct(self, char: str, message: str) -> Punct:
        """Consume punctuation `char` or raise."""
        if self.check_punct(char):
            return self.advance()
        raise self.error(message)

    def consume_ident(self, message: str) -> Ident:
        """Consume an identifier or raise."""
        if self.check_ident():
            return self.advance()
        raise self.error(message)

    def consume_group(self, delimiter: Delimiter, message: str) -> Group:
        if self.check_group(delimiter):
            return self.advance()
        raise self.error(message)

    def expect_end(self, message: str):
        """Raise unless every token has been consumed."""
        if not self.is_at_end():
            raise self.error(message)

    def error(self, message: str) -> ParseError:
        """Build a parse error located at the current token."""
        token = self.peek()
        if token is None:
            token = self.tokens[-1] if self.tokens else self.anchor
        return ParseError.at(token, message)
