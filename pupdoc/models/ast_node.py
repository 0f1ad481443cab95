"""AST node data models.

The grammar produces a tree of these nodes. Each node is tagged by ``kind``
and records where it sits in the source text, so consumers can dispatch on
the tag and slice the source text without holding on to tokens.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ASTNode(BaseModel):
    """Abstract Syntax Tree node representation."""

    model_config = ConfigDict(frozen=True)

    kind: str
    line: int
    offset: int
    length: int

    def source_in(self, text: str) -> str:
        """Return the slice of ``text`` this node was parsed from."""
        return text[self.offset:self.offset + self.length]


class Parameter(BaseModel):
    """A parameter of a class, defined type, function or plan."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_expr: Optional[str] = None
    value: Optional[str] = None
    captures_rest: bool = False


class Expression(ASTNode):
    """Any top-level construct that is not a definition."""

    kind: str = "Expression"


class Program(ASTNode):
    kind: str = "Program"
    definitions: Tuple[ASTNode, ...] = ()
    source_text: str = ""


class Factory(ASTNode):
    """Builder wrapper around a single model node."""

    kind: str = "Factory"
    current: ASTNode


class HostClassDefinition(ASTNode):
    kind: str = "HostClassDefinition"
    name: str
    parameters: Tuple[Parameter, ...] = ()
    parent_class: Optional[str] = None
    body: Optional[str] = None


class ResourceTypeDefinition(ASTNode):
    kind: str = "ResourceTypeDefinition"
    name: str
    parameters: Tuple[Parameter, ...] = ()
    body: Optional[str] = None


class FunctionDefinition(ASTNode):
    kind: str = "FunctionDefinition"
    name: str
    parameters: Tuple[Parameter, ...] = ()
    return_type: Optional[str] = None
    body: Optional[str] = None


class PlanDefinition(ASTNode):
    kind: str = "PlanDefinition"
    name: str
    parameters: Tuple[Parameter, ...] = ()
    body: Optional[str] = None


class TypeAlias(ASTNode):
    kind: str = "TypeAlias"
    name: str
    type_expr: str


class NodeDefinition(ASTNode):
    kind: str = "NodeDefinition"
    host_matches: Tuple[str, ...] = ()
    parent: Optional[str] = None
    body: Optional[str] = None
