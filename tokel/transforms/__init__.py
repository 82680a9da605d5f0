"""
Built-in transformation kinds and the static name registry.
"""

from .base import ArgumentlessTransformate, Transformate
from .case import Case
from .concatenate import Concatenate, ConcatenateMode
from .strings import Stringify, Unstringify
from .structure import Append, Count, Flatten, Prefix, Reverse, Ungroup, flatten_tokens

# Closed set of transform names, in the order they are listed in errors
RECOGNIZED_TRANSFORMS = {
    kind.name: kind for kind in (
        Case(),
        Ungroup(),
        Flatten(),
        Reverse(),
        Stringify(),
        Unstringify(),
        Concatenate(),
        Append(),
        Prefix(),
        Count(),
    )
}

__all__ = [
    "RECOGNIZED_TRANSFORMS",
    "Transformate",
    "ArgumentlessTransformate",
    "Case",
    "Ungroup",
    "Flatten",
    "Reverse",
    "Stringify",
    "Unstringify",
    "Concatenate",
    "ConcatenateMode",
    "Append",
    "Prefix",
    "Count",
    "flatten_tokens",
]
