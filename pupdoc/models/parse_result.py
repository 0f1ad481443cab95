"""Parse outcome data models."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pupdoc.models.ast_node import Factory
from pupdoc.models.statement import Statement


class ParseError(BaseModel):
    """Syntax error recorded for a source file."""

    model_config = ConfigDict(frozen=True)

    message: str
    file: str = ""
    line: Optional[int] = None
    column: Optional[int] = None


class ParseOutcome(BaseModel):
    """Result of running the grammar over a source text: a root or an error."""

    model_config = ConfigDict(frozen=True)

    root: Optional[Factory] = None
    error: Optional[ParseError] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "ParseOutcome":
        if (self.root is None) == (self.error is None):
            raise ValueError("ParseOutcome requires exactly one of root or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class ParseResult(BaseModel):
    """Statements extracted from one source file, or the error that prevented it."""

    model_config = ConfigDict(frozen=True)

    statements: Tuple[Statement, ...] = Field(default_factory=tuple)
    error: Optional[ParseError] = None

    @model_validator(mode="after")
    def _error_clears_statements(self) -> "ParseResult":
        if self.error is not None and self.statements:
            raise ValueError("A failed parse cannot carry statements")
        return self

    @property
    def succeeded(self) -> bool:
        return self.error is None
