"""
The `case` transform.
"""

from ..casing import CASE_STYLES, CaseStyle, lookup_case, to_case
from ..errors import TransformError
from ..lexer import reparse
from ..parser import TokenCursor
from ..token import Group, Ident, Literal
from ..token_types import Delimiter, LiteralKind
from .base import Transformate


class Case(Transformate):
    """
    Convert identifiers, string literals and boolean literals to a case style.

    Groups are converted recursively and always rebuilt as brace groups.
    """

    name = "case"

    def parse_arguments(self, arguments, anchor=None) -> CaseStyle:
        cursor = TokenCursor(arguments, anchor)
        target = cursor.consume_ident("Expected a case name, e.g. `case{snake}`.")
        cursor.expect_end("Expected a single case name.")

        style = lookup_case(target.name)
        if style is None:
            available = " ".join(f"`{to_case(name, 'Snake')}`" for name in CASE_STYLES)
            raise TransformError.at(
                target,
                f"Unknown case: `{target}`\navailable cases are: {available}",
            )
        return style

    def apply(self, tokens, style):
        output = []
        for token in tokens:
            if isinstance(token, Ident):
                output.extend(reparse(style.convert(token.name), token))
            elif isinstance(token, Literal) and token.kind in (LiteralKind.STRING, LiteralKind.BOOLEAN):
                output.extend(reparse(style.convert(token.value), token))
            elif isinstance(token, Group):
                group = Group(Delimiter.BRACE, self.apply(token.tokens, style))
                output.append(group.located_like(token))
            else:
                output.append(token)
        return output
