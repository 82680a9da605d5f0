"""
The contract every transformation kind implements.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..token import TokenTree

logger = logging.getLogger(__name__)


class Transformate(ABC):
    """
    A pure rewrite of a token sequence.

    Arguments arrive as the raw tokens written between the braces after the
    transform name and are turned into a typed value by `parse_arguments`
    before every `apply`. Neither method mutates its input.
    """

    name: str = ""

    @abstractmethod
    def parse_arguments(self, arguments: List[TokenTree], anchor: Optional[TokenTree] = None) -> Any:
        """Turn raw argument tokens into the value `apply` expects."""
        pass

    @abstractmethod
    def apply(self, tokens: List[TokenTree], arguments: Any) -> List[TokenTree]:
        """Return a new token sequence built from `tokens`."""
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class ArgumentlessTransformate(Transformate):
    """A transformation that takes no arguments; supplied ones are ignored."""

    def parse_arguments(self, arguments, anchor=None):
        if arguments:
            logger.warning("`%s` takes no arguments, ignoring %d token(s)",
                           self.name, len(arguments))
        return None
