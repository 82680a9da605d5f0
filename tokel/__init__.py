"""
tokel
Inline token transformations: `[< token:transform{args} ... >]:finalizer`.

Version: 0.1.0
"""

__version__ = "0.1.0"

import logging
from typing import List

from .casing import CASE_STYLES, CaseStyle
from .chain import Transform, TransformChain
from .embed import Block, Embed, Modified, PassThrough, Segment, Sequence, TransformSequence, Untouched
from .errors import ErrorReporter, LexerError, ParseError, TokelError, TransformError, format_diagnostic
from .lexer import Lexer, tokenize
from .token import Group, Ident, Literal, Punct, TokenTree, first_token, render
from .token_types import Delimiter, LiteralKind, Spacing
from .transforms import RECOGNIZED_TRANSFORMS

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Lexer",
    "tokenize",
    "render",
    "TokenTree",
    "Ident",
    "Punct",
    "Literal",
    "Group",
    "Delimiter",
    "Spacing",
    "LiteralKind",
    "Embed",
    "Sequence",
    "PassThrough",
    "TransformSequence",
    "Block",
    "Segment",
    "Untouched",
    "Modified",
    "Transform",
    "TransformChain",
    "RECOGNIZED_TRANSFORMS",
    "CASE_STYLES",
    "CaseStyle",
    "TokelError",
    "LexerError",
    "ParseError",
    "TransformError",
    "ErrorReporter",
    "format_diagnostic",
    "expand_tokens",
    "expand",
    "read_source",
    "embed_file",
]


def expand_tokens(tokens: List[TokenTree]) -> List[TokenTree]:
    """
    Expand every marked region in a token stream.

    Raises a TokelError subclass on the first failure; no partial output
    is produced.
    """
    try:
        return Embed.recursively_expand(tokens)
    except RecursionError:
        raise TokelError.at(first_token(tokens), "token tree nested too deeply") from None


def expand(source_code: str, filename: str = "<stdin>") -> str:
    """
    Expand tokel source text.

    Args:
        source_code: Text containing `[< ... >]` regions
        filename: Optional filename for error reporting

    Returns:
        The expanded token stream in canonical text form
    """
    tokens = Lexer(source_code, filename).tokenize()
    expanded = expand_tokens(tokens)
    try:
        return render(expanded)
    except RecursionError:
        raise TokelError.at(first_token(tokens), "token tree nested too deeply") from None


def read_source(filename: str) -> str:
    with open(filename, 'r', encoding='utf-8') as file:
        return file.read()


def embed_file(filename: str) -> str:
    """Expand the contents of a source file."""
    return expand(read_source(filename), filename)
