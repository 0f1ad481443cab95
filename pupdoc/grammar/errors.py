"""Errors raised by the Puppet grammar."""

from typing import Optional


class PuppetSyntaxError(Exception):
    """Raised when source text does not conform to the Puppet grammar."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line: {self.line})"
        return f"{self.message} (line: {self.line}, column: {self.column})"
