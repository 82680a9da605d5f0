"""
Case styles for the `case` transform.

Text is split into words on separators (`_`, `-`, space) and on boundaries
inside words (`helloWorld`, `HTTPRequest`, `v2`), then re-joined with the
pattern and delimiter of the selected style.
"""

import re
from typing import Callable, Dict, List, Optional

SEPARATORS = re.compile(r"[_\- ]+")


def _kind(char: str) -> str:
    if char.isdigit():
        return "digit"
    if char.isupper():
        return "upper"
    if char.islower():
        return "lower"
    return "other"


def _split_chunk(chunk: str) -> List[str]:
    """Split a separator-free chunk at case and digit boundaries."""
    words = []
    start = 0
    for index in range(1, len(chunk)):
        before = _kind(chunk[index - 1])
        here = _kind(chunk[index])
        after = _kind(chunk[index + 1]) if index + 1 < len(chunk) else None

        boundary = (
            (before == "lower" and here == "upper")
            or (before == "upper" and here == "upper" and after == "lower")
            or (before == "digit" and here in ("upper", "lower"))
            or (before in ("upper", "lower") and here == "digit")
        )
        if boundary:
            words.append(chunk[start:index])
            start = index
    words.append(chunk[start:])
    return words


def split_words(text: str) -> List[str]:
    """Split text into the words a case style re-joins."""
    words = []
    for chunk in SEPARATORS.split(text):
        if chunk:
            words.extend(_split_chunk(chunk))
    return words


def _lowercase(words):
    return [word.lower() for word in words]


def _uppercase(words):
    return [word.upper() for word in words]


def _capital(words):
    return [word[:1].upper() + word[1:].lower() for word in words]


def _camel(words):
    return _lowercase(words[:1]) + _capital(words[1:])


def _toggle(words):
    return [word[:1].lower() + word[1:].upper() for word in words]


def _alternating(words):
    result = []
    upper = False
    for word in words:
        letters = []
        for char in word:
            if char.isupper() or char.islower():
                letters.append(char.upper() if upper else char.lower())
                upper = not upper
            else:
                letters.append(char)
        result.append("".join(letters))
    return result


class CaseStyle:
    """A named case convention: a word pattern plus a delimiter."""

    def __init__(self, name: str, pattern: Callable[[List[str]], List[str]], delimiter: str):
        self.name = name
        self.pattern = pattern
        self.delimiter = delimiter

    def convert(self, text: str) -> str:
        return self.delimiter.join(self.pattern(split_words(text)))

    def __repr__(self):
        return f"CaseStyle({self.name})"


CASE_STYLES: Dict[str, CaseStyle] = {
    style.name: style for style in (
        CaseStyle("Upper", _uppercase, " "),
        CaseStyle("Lower", _lowercase, " "),
        CaseStyle("Title", _capital, " "),
        CaseStyle("Toggle", _toggle, " "),
        CaseStyle("Alternating", _alternating, " "),
        CaseStyle("Camel", _camel, ""),
        CaseStyle("Pascal", _capital, ""),
        CaseStyle("UpperCamel", _capital, ""),
        CaseStyle("Snake", _lowercase, "_"),
        CaseStyle("UpperSnake", _uppercase, "_"),
        CaseStyle("ScreamingSnake", _uppercase, "_"),
        CaseStyle("Kebab", _lowercase, "-"),
        CaseStyle("Cobol", _uppercase, "-"),
        CaseStyle("UpperKebab", _uppercase, "-"),
        CaseStyle("Train", _capital, "-"),
        CaseStyle("Flat", _lowercase, ""),
        CaseStyle("UpperFlat", _uppercase, ""),
    )
}


def to_case(text: str, style_name: str) -> str:
    """Convert text to the registered style `style_name` (Pascal spelling)."""
    return CASE_STYLES[style_name].convert(text)


def lookup_case(name: str) -> Optional[CaseStyle]:
    """
    Find a case style by user-facing name.

    The name is normalized to Pascal case first, so `snake`, `Snake` and
    `upper_snake` resolve to the `Snake` and `UpperSnake` styles.
    """
    return CASE_STYLES.get(to_case(name, "Pascal"))
