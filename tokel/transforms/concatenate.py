"""
The `concatenate` transform.
"""

from enum import Enum, auto

from ..errors import TransformError
from ..parser import TokenCursor
from ..token import Ident, Literal, Punct, first_token
from ..token_types import LiteralKind
from .base import Transformate
from .structure import flatten_tokens


class ConcatenateMode(Enum):
    # Join everything into one identifier (default)
    IDENT = auto()
    # Same, emitted with the `r#` marker
    RAW_IDENT = auto()
    # Join the top-level tokens into one string literal
    STRING = auto()


RECOGNIZED_MODES = {
    "ident": ConcatenateMode.IDENT,
    "r#ident": ConcatenateMode.RAW_IDENT,
    "string": ConcatenateMode.STRING,
}


def identifier_fragment(token) -> str:
    """Text a flattened token contributes to a concatenated identifier."""
    if isinstance(token, Punct):
        return token.char
    if isinstance(token, Ident):
        return token.name
    if token.is_bytes():
        raise TransformError.at(token, "byte literals are not supported in concatenation")
    if token.kind == LiteralKind.VERBATIM:
        return token.text
    # Strings and chars give their value, numbers their base-10 digits without suffix
    return token.value


def string_fragment(token) -> str:
    """Text a top-level token contributes to a concatenated string."""
    if isinstance(token, Literal) and token.is_string():
        return token.value
    return str(token)


class Concatenate(Transformate):
    """
    Join tokens into a single identifier, raw identifier or string literal.

    The identifier modes flatten the input first; the string mode joins the
    rendered top-level tokens as they are.
    """

    name = "concatenate"

    def parse_arguments(self, arguments, anchor=None) -> ConcatenateMode:
        if not arguments:
            return ConcatenateMode.IDENT

        cursor = TokenCursor(arguments, anchor)
        target = cursor.consume_ident("Expected a concatenation mode.")
        cursor.expect_end("Expected a single concatenation mode.")

        mode = RECOGNIZED_MODES.get(str(target))
        if mode is None:
            raise TransformError.at(
                target,
                f"unknown mode: `{target}`, valid modes are: {' '.join(RECOGNIZED_MODES)}",
            )
        return mode

    def apply(self, tokens, mode):
        anchor = first_token(tokens)

        if mode == ConcatenateMode.STRING:
            text = "".join(string_fragment(token) for token in tokens)
            return [Literal.raw_string(text).located_like(anchor)]

        name = "".join(identifier_fragment(token) for token in flatten_tokens(tokens))
        if not name.isidentifier():
            raise TransformError.at(anchor, f"`{name}` is not a valid identifier")

        ident = Ident(name, raw=mode == ConcatenateMode.RAW_IDENT)
        return [ident.located_like(anchor)]
