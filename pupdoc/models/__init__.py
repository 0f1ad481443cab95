"""Data models for the Puppet documentation extractor."""

from .ast_node import (
    ASTNode,
    Expression,
    Factory,
    FunctionDefinition,
    HostClassDefinition,
    NodeDefinition,
    Parameter,
    PlanDefinition,
    Program,
    ResourceTypeDefinition,
    TypeAlias,
)
from .parse_result import ParseError, ParseOutcome, ParseResult
from .statement import (
    ClassStatement,
    DataTypeAliasStatement,
    Declaration,
    DefinedTypeStatement,
    FunctionStatement,
    ParameterizedStatement,
    PlanStatement,
    ResourceTypeStatement,
    Statement,
)

__all__ = [
    # AST models
    "ASTNode",
    "Expression",
    "Factory",
    "FunctionDefinition",
    "HostClassDefinition",
    "NodeDefinition",
    "Parameter",
    "PlanDefinition",
    "Program",
    "ResourceTypeDefinition",
    "TypeAlias",
    # Statement models
    "Statement",
    "ParameterizedStatement",
    "ClassStatement",
    "DefinedTypeStatement",
    "FunctionStatement",
    "PlanStatement",
    "DataTypeAliasStatement",
    "ResourceTypeStatement",
    "Declaration",
    # Parse outcome models
    "ParseError",
    "ParseOutcome",
    "ParseResult",
]
