"""
Conversions between token sequences and string literals.
"""

from ..lexer import reparse
from ..token import Literal, first_token, render
from .base import ArgumentlessTransformate


class Stringify(ArgumentlessTransformate):
    """
    Render the input to canonical text and emit it as one raw string literal.

    The literal is fenced with the shortest run of `#` absent from the text,
    so any payload embeds unambiguously.
    """

    name = "stringify"

    def apply(self, tokens, arguments):
        return [Literal.raw_string(render(tokens)).located_like(first_token(tokens))]


class Unstringify(ArgumentlessTransformate):
    """
    Re-tokenize every top-level string literal in place.

    Not an exact inverse of `stringify`: other literals and groups are kept
    as they are, and the re-tokenized text loses its original spacing.
    """

    name = "unstringify"

    def apply(self, tokens, arguments):
        output = []
        for token in tokens:
            if isinstance(token, Literal) and token.is_string():
                output.extend(reparse(token.value, token))
            else:
                output.append(token)
        return output
