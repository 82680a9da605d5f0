"""
Transformation chains: `:kind{args}:kind{args}...`.
"""

import logging
from typing import List, Optional

from .errors import ParseError
from .parser import TokenCursor
from .token import Ident, TokenTree
from .token_types import Delimiter
from .transforms import RECOGNIZED_TRANSFORMS, Transformate

logger = logging.getLogger(__name__)


class Transform:
    """A pending transformation: a registered kind plus its raw argument tokens."""

    def __init__(self, kind: Transformate, arguments: List[TokenTree], name_token: Optional[Ident] = None):
        self.kind = kind
        self.arguments = arguments
        self.name_token = name_token

    @classmethod
    def parse(cls, cursor: TokenCursor) -> 'Transform':
        """Parse `:name` with an optional `{arguments}` group."""
        cursor.consume_punct(':', "Expected ':' before transform name.")
        name_token = cursor.consume_ident("Expected transform name after ':'.")

        kind = RECOGNIZED_TRANSFORMS.get(str(name_token))
        if kind is None:
            available = " ".join(f"`{name}`" for name in RECOGNIZED_TRANSFORMS)
            raise ParseError.at(
                name_token,
                f"unrecognized transform: `{name_token}`\navailable transforms are: {available}",
            )

        arguments = []
        if cursor.check_group(Delimiter.BRACE):
            arguments = list(cursor.advance().tokens)

        return cls(kind, arguments, name_token)

    def apply(self, tokens: List[TokenTree]) -> List[TokenTree]:
        arguments = self.kind.parse_arguments(self.arguments, self.name_token)
        return self.kind.apply(tokens, arguments)

    def __repr__(self):
        return f"Transform({self.kind.name}, {len(self.arguments)} argument token(s))"


class TransformChain:
    """
    A non-empty, ordered list of transforms applied left to right.
    """

    def __init__(self, steps: List[Transform]):
        if not steps:
            raise ValueError("A transform chain needs at least one step")
        self.steps = steps

    @classmethod
    def parse(cls, cursor: TokenCursor) -> 'TransformChain':
        """Parse transforms for as long as `:` + identifier follows."""
        steps = [Transform.parse(cursor)]
        while cursor.check_chain():
            steps.append(Transform.parse(cursor))
        return cls(steps)

    def expand(self, tokens: List[TokenTree]) -> List[TokenTree]:
        """Fold the chain over `tokens`; the first failing step aborts the chain."""
        for step in self.steps:
            logger.debug("applying `%s` to %d token(s)", step.kind.name, len(tokens))
            tokens = step.apply(tokens)
        return tokens

    def __iter__(self):
        return iter(self.steps)

    def __len__(self):
        return len(self.steps)

    def __repr__(self):
        return "TransformChain(" + "".join(f":{step.kind.name}" for step in self.steps) + ")"
