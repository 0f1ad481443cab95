"""
Declaration visitor.

Walks the AST produced by the grammar and turns each documentable
definition into a statement, attaching the comment block found above it.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from pupdoc.models.ast_node import (
    ASTNode,
    Factory,
    FunctionDefinition,
    HostClassDefinition,
    PlanDefinition,
    Program,
    ResourceTypeDefinition,
    TypeAlias,
)
from pupdoc.models.statement import (
    ClassStatement,
    DataTypeAliasStatement,
    DefinedTypeStatement,
    FunctionStatement,
    PlanStatement,
    Statement,
)
from pupdoc.parsers.docstring import DEFAULT_MAX_BLANK_LINES, Docstring, extract_docstring
from pupdoc.parsers.source_text import SourceUnit
from pupdoc.utils.logging import log_skipped_file
from pupdoc.utils.version import versioncmp

logger = logging.getLogger(__name__)


class PlanGate(BaseModel):
    """Decides whether plan files must be skipped on the hosting runtime."""

    model_config = ConfigDict(frozen=True)

    runtime_version: str
    minimum_version: str = "5.0.0"
    path_pattern: str = r"^plans/"

    def blocks(self, file: str) -> bool:
        """Return True if ``file`` holds plans the runtime is too old for."""
        if versioncmp(self.runtime_version, self.minimum_version) >= 0:
            return False
        return re.search(self.path_pattern, str(file)) is not None

    @property
    def reason(self) -> str:
        major = self.minimum_version.split(".")[0]
        return f"Puppet Plans require Puppet {major} or greater."


class DeclarationVisitor:
    """Dispatches on AST node kind and collects statements in source order."""

    def __init__(
        self,
        file: str,
        gate: Optional[PlanGate] = None,
        max_blank_lines: int = DEFAULT_MAX_BLANK_LINES,
        log: Optional[logging.LoggerAdapter] = None,
    ):
        self.file = file
        self.gate = gate
        self.max_blank_lines = max_blank_lines
        self.log = log or logging.LoggerAdapter(logger, {})
        self.skipped = False
        self._source: Optional[SourceUnit] = None
        self._source_text = ""
        self._handlers: Dict[str, Callable[[ASTNode], List[Statement]]] = {
            "Program": self._visit_program,
            "Factory": self._visit_factory,
            "HostClassDefinition": self._visit_class,
            "ResourceTypeDefinition": self._visit_defined_type,
            "FunctionDefinition": self._visit_function,
            "PlanDefinition": self._visit_plan,
            "TypeAlias": self._visit_type_alias,
        }

    def visit(self, node: ASTNode) -> List[Statement]:
        """
        Visit a node.

        Args:
            node: Any AST node

        Returns:
            Statements produced by the node, empty for kinds that are not documented
        """
        handler = self._handlers.get(node.kind, self._visit_other)
        return handler(node)

    def _visit_program(self, node: Program) -> List[Statement]:
        """
        Document the definitions of a parsed file, or skip a gated plans file.

        The gate runs on an already parsed Program, so a plans file with a
        syntax error is reported as a parse failure even on runtimes the gate
        would skip it for.
        """
        if self.gate is not None and self.gate.blocks(self.file):
            log_skipped_file(self.log, self.file, self.gate.reason)
            self.skipped = True
            return []

        # Comments are located against the whole file
        self._source_text = node.source_text
        self._source = SourceUnit.from_text(node.source_text, self.file)

        statements: List[Statement] = []
        for definition in node.definitions:
            statements.extend(self.visit(definition))
        return statements

    def _visit_factory(self, node: Factory) -> List[Statement]:
        return self.visit(node.current)

    def _visit_other(self, node: ASTNode) -> List[Statement]:
        return []

    def _docstring(self, node: ASTNode) -> Docstring:
        if self._source is None:
            return Docstring()
        return extract_docstring(node.line, self._source, self.max_blank_lines)

    def _common(self, node: ASTNode) -> dict:
        docstring = self._docstring(node)
        return {
            "name": node.name,
            "file": self.file,
            "line": node.line,
            "source": node.source_in(self._source_text),
            "docstring": docstring.text,
            "comments_range": docstring.comments_range,
        }

    def _visit_class(self, node: HostClassDefinition) -> List[Statement]:
        return [ClassStatement(parameters=node.parameters, parent_class=node.parent_class, **self._common(node))]

    def _visit_defined_type(self, node: ResourceTypeDefinition) -> List[Statement]:
        return [DefinedTypeStatement(parameters=node.parameters, **self._common(node))]

    def _visit_function(self, node: FunctionDefinition) -> List[Statement]:
        return [FunctionStatement(parameters=node.parameters, return_type=node.return_type, **self._common(node))]

    def _visit_plan(self, node: PlanDefinition) -> List[Statement]:
        return [PlanStatement(parameters=node.parameters, **self._common(node))]

    def _visit_type_alias(self, node: TypeAlias) -> List[Statement]:
        return [DataTypeAliasStatement(alias_of=node.type_expr, **self._common(node))]
