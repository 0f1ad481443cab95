"""Statement data models.

A statement is the documentation record produced for one documentable
declaration. Statements hold no reference back to the AST they came from.
"""

from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from pupdoc.models.ast_node import Parameter


class Statement(BaseModel):
    """Common fields of every documented declaration."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Declaration kind tag")
    name: str = Field(..., description="Declared name")
    file: str = Field(..., description="File the declaration was parsed from")
    line: int = Field(..., description="Line of the declaration keyword (1-indexed)")
    source: str = Field("", description="Source text of the declaration")
    docstring: str = Field("", description="Raw text of the attached comment block")
    comments_range: Optional[Tuple[int, int]] = Field(
        None, description="First and last line of the attached comment block"
    )


class ParameterizedStatement(Statement):
    """A statement for a declaration that accepts parameters."""

    parameters: Tuple[Parameter, ...] = ()


class ClassStatement(ParameterizedStatement):
    kind: str = "class"
    parent_class: Optional[str] = None


class DefinedTypeStatement(ParameterizedStatement):
    kind: str = "defined_type"


class FunctionStatement(ParameterizedStatement):
    kind: str = "function"
    return_type: Optional[str] = None


class PlanStatement(ParameterizedStatement):
    kind: str = "plan"


class DataTypeAliasStatement(Statement):
    kind: str = "data_type_alias"
    alias_of: str


class ResourceTypeStatement(ParameterizedStatement):
    """Record shape for resource types and tasks discovered outside manifests."""

    kind: str = "resource_type"


Declaration = Union[
    ClassStatement,
    DefinedTypeStatement,
    FunctionStatement,
    PlanStatement,
    DataTypeAliasStatement,
    ResourceTypeStatement,
]
