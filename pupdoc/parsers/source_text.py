"""Line index over a source file."""

from typing import Iterator, Tuple

from pydantic import BaseModel, ConfigDict


class SourceUnit(BaseModel):
    """Immutable file identifier plus the lines of its text, addressed from 1."""

    model_config = ConfigDict(frozen=True)

    file: str
    lines: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str, file: str = "") -> "SourceUnit":
        """Split ``text`` on ``\\n`` only, the same line breaks the lexer counts."""
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return cls(file=file, lines=tuple(line.rstrip("\r") for line in lines))

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> str:
        """
        Get a line by its 1-based number.

        Raises:
            IndexError: If the number is outside the file
        """
        if number < 1 or number > len(self.lines):
            raise IndexError(f"Line {number} is outside {self.file or 'source'} ({len(self.lines)} lines)")
        return self.lines[number - 1]

    def range_before(self, number: int) -> Iterator[Tuple[int, str]]:
        """Yield ``(line_number, text)`` for the lines above ``number``, nearest first."""
        for index in range(min(number - 1, len(self.lines)), 0, -1):
            yield index, self.lines[index - 1]
