"""
Error handling system for tokel.
Every error carries the location of the token that caused it.
"""

import sys


class TokelError(Exception):
    """Base class for all tokel errors."""

    def __init__(self, message, line=None, column=None, filename=None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename

    @classmethod
    def at(cls, token, message):
        """Create an error anchored at `token` (which may be None)."""
        if token is None:
            return cls(message)
        return cls(message, token.line, token.column, token.filename)

    def __str__(self):
        location = ""
        if self.filename:
            location += f"File \"{self.filename}\""
        if self.line is not None:
            location += f", line {self.line}" if location else f"line {self.line}"
        if self.column is not None:
            location += f", column {self.column}"

        if location:
            return f"{self.__class__.__name__}: {location}\n  {self.message}"
        return f"{self.__class__.__name__}: {self.message}"


class LexerError(TokelError):
    """Error while turning text into tokens."""
    pass


class ParseError(TokelError):
    """Malformed block, chain or transform arguments."""
    pass


class TransformError(TokelError):
    """A transformation rejected its arguments or its input."""
    pass


def format_diagnostic(error, source=None):
    """
    Render an error together with the offending source line and a caret
    under the reported column.
    """
    text = str(error)
    if source is None or error.line is None:
        return text

    lines = source.splitlines()
    if not 1 <= error.line <= len(lines):
        return text

    source_line = lines[error.line - 1]
    gutter = f"{error.line} | "
    caret = ""
    if error.column is not None:
        caret = "\n" + " " * (len(gutter) + error.column - 1) + "^"
    return f"{text}\n{gutter}{source_line}{caret}"


class ErrorReporter:
    """Collects errors raised while expanding and prints them as diagnostics."""

    def __init__(self, source=None):
        self.source = source
        self.errors = []

    def report(self, error):
        """Record an error."""
        self.errors.append(error)
        return error

    def print_errors(self, stream=None):
        """Print all errors to stderr."""
        stream = stream or sys.stderr
        for error in self.errors:
            print(format_diagnostic(error, self.source), file=stream)
