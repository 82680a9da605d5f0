"""
Marked regions and the recursive expansion driver.

An input stream is an `Embed`: a list of sequences, each either a token
passed through untouched or a `[< ... >]` block with an optional finalizer
chain. A block is a list of segments, each a single token optionally
followed by a transform chain.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .chain import TransformChain
from .parser import TokenCursor
from .token import Group, TokenTree
from .token_types import Delimiter

logger = logging.getLogger(__name__)


def is_marked_region(token: TokenTree) -> bool:
    """A bracket group whose first inner token is `<` and last is `>`."""
    if not isinstance(token, Group) or token.delimiter != Delimiter.BRACKET:
        return False
    inner = token.tokens
    return len(inner) >= 2 and inner[0].is_punct('<') and inner[-1].is_punct('>')


class Segment(ABC):
    """One token of a block, with or without a transform chain."""

    def __init__(self, token: TokenTree):
        self.token = token

    @classmethod
    def parse(cls, cursor: TokenCursor) -> 'Segment':
        token = cursor.advance()
        if cursor.check_chain():
            return Modified(token, TransformChain.parse(cursor))
        return Untouched(token)

    @abstractmethod
    def expand(self) -> List[TokenTree]:
        pass


class Untouched(Segment):
    """A segment emitted as written."""

    def expand(self):
        return [self.token]

    def __repr__(self):
        return f"Untouched({self.token!r})"


class Modified(Segment):
    """A segment whose token is run through a transform chain."""

    def __init__(self, token: TokenTree, chain: TransformChain):
        super().__init__(token)
        self.chain = chain

    def expand(self):
        return self.chain.expand([self.token])

    def __repr__(self):
        return f"Modified({self.token!r}, {self.chain!r})"


class Block:
    """The segments between the `<` and `>` markers of a marked region."""

    def __init__(self, segments: List[Segment]):
        self.segments = segments

    @classmethod
    def parse(cls, cursor: TokenCursor) -> 'Block':
        """Parse `<`, segments, then `>`."""
        cursor.consume_punct('<', "Expected '<' to open a block.")

        segments = []
        while not cursor.check_punct('>'):
            if cursor.is_at_end():
                raise cursor.error("Expected '>' to close the block.")
            segments.append(Segment.parse(cursor))
        cursor.advance()

        return cls(segments)

    def expand(self) -> List[TokenTree]:
        output = []
        for segment in self.segments:
            output.extend(segment.expand())
        return output


class Sequence(ABC):
    """One top-level element of an embed."""

    @classmethod
    def parse(cls, cursor: TokenCursor) -> 'Sequence':
        token = cursor.advance()
        if not is_marked_region(token):
            return PassThrough(token)

        block_cursor = TokenCursor(token.tokens, token)
        block = Block.parse(block_cursor)
        if not block_cursor.is_at_end():
            # The block closed before the final `>`: not a well-formed region
            logger.debug("bracket group at %s:%s closes early, passing it through",
                         token.line, token.column)
            return PassThrough(token)

        finalizer = TransformChain.parse(cursor) if cursor.check_chain() else None
        return TransformSequence(block, finalizer, token)

    @abstractmethod
    def expand(self) -> List[TokenTree]:
        pass


class PassThrough(Sequence):
    """A token outside any marked region."""

    def __init__(self, token: TokenTree):
        self.token = token

    def expand(self):
        return [self.token]

    def __repr__(self):
        return f"PassThrough({self.token!r})"


class TransformSequence(Sequence):
    """A marked region, with an optional finalizer applied to its whole output."""

    def __init__(self, block: Block, finalizer: Optional[TransformChain] = None,
                 token: Optional[TokenTree] = None):
        self.block = block
        self.finalizer = finalizer
        self.token = token

    def expand(self):
        if self.token is not None:
            logger.debug("expanding block at %s:%s", self.token.line, self.token.column)
        output = self.block.expand()
        if self.finalizer is not None:
            output = self.finalizer.expand(output)
        return output

    def __repr__(self):
        return f"TransformSequence({len(self.block.segments)} segment(s), {self.finalizer!r})"


class Embed:
    """An ordered list of sequences covering a whole token stream."""

    def __init__(self, sequences: List[Sequence]):
        self.sequences = sequences

    @classmethod
    def parse(cls, tokens: List[TokenTree]) -> 'Embed':
        cursor = TokenCursor(tokens)
        sequences = []
        while not cursor.is_at_end():
            sequences.append(Sequence.parse(cursor))
        return cls(sequences)

    def expand(self) -> List[TokenTree]:
        output = []
        for sequence in self.sequences:
            output.extend(sequence.expand())
        return output

    @classmethod
    def recursively_expand(cls, tokens: List[TokenTree]) -> List[TokenTree]:
        """
        Expand every group's contents depth-first, then parse and expand the
        resulting top-level stream.

        Rebuilt groups keep their delimiter and source position.
        """
        expanded = []
        for token in tokens:
            if isinstance(token, Group):
                inner = cls.recursively_expand(token.tokens)
                expanded.append(Group(token.delimiter, inner).located_like(token))
            else:
                expanded.append(token)

        return cls.parse(expanded).expand()
