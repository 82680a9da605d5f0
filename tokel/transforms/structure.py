"""
Transforms that rearrange tokens without looking inside them:
ungroup, flatten, reverse, count, append and prefix.
"""

from typing import List

from ..token import Group, Literal, TokenTree, first_token
from .base import ArgumentlessTransformate, Transformate


def flatten_tokens(tokens: List[TokenTree]) -> List[TokenTree]:
    """Remove every level of grouping, keeping leaf order."""
    output = []
    pending = [iter(tokens)]
    while pending:
        for token in pending[-1]:
            if isinstance(token, Group):
                pending.append(iter(token.tokens))
                break
            output.append(token)
        else:
            pending.pop()
    return output


class Ungroup(ArgumentlessTransformate):
    """Splice the contents of each top-level group in place of the group."""

    name = "ungroup"

    def apply(self, tokens, arguments):
        output = []
        for token in tokens:
            if isinstance(token, Group):
                output.extend(token.tokens)
            else:
                output.append(token)
        return output


class Flatten(ArgumentlessTransformate):
    """Recursively remove all groups."""

    name = "flatten"

    def apply(self, tokens, arguments):
        return flatten_tokens(tokens)


class Reverse(ArgumentlessTransformate):
    """Reverse the top-level token order; group contents keep their order."""

    name = "reverse"

    def apply(self, tokens, arguments):
        return list(reversed(tokens))


class Count(ArgumentlessTransformate):
    """Emit the number of top-level tokens as an integer literal."""

    name = "count"

    def apply(self, tokens, arguments):
        return [Literal.integer(len(tokens)).located_like(first_token(tokens))]


class Append(Transformate):
    """Emit the input followed by the argument tokens."""

    name = "append"

    def parse_arguments(self, arguments, anchor=None):
        return list(arguments)

    def apply(self, tokens, arguments):
        return list(tokens) + list(arguments)


class Prefix(Transformate):
    """Emit the argument tokens followed by the input."""

    name = "prefix"

    def parse_arguments(self, arguments, anchor=None):
        return list(arguments)

    def apply(self, tokens, arguments):
        return list(arguments) + list(tokens)
