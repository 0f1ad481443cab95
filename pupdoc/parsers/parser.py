"""
Puppet manifest parser.

Runs the grammar over one source file, walks the resulting AST and keeps the
documented statements. A file with a syntax error yields an empty result
carrying the error; nothing is raised to the caller.
"""

from enum import Enum
from typing import Optional, Tuple

from pupdoc.config import RuntimeSettings, Settings
from pupdoc.config import runtime_settings as default_runtime_settings
from pupdoc.config import settings as default_settings
from pupdoc.grammar import GrammarOptions
from pupdoc.models.parse_result import ParseError, ParseResult
from pupdoc.models.statement import Statement
from pupdoc.parsers.adapter import AstAdapter
from pupdoc.parsers.visitor import DeclarationVisitor, PlanGate
from pupdoc.utils.logging import ContextLoggerAdapter, get_logger, log_parse_failure


class ParserState(str, Enum):
    """Lifecycle of a parser."""

    UNPARSED = "unparsed"
    PARSING = "parsing"
    PARSED = "parsed"
    FAILED = "failed"


def grammar_options_for(runtime: RuntimeSettings, tasks: bool = True) -> GrammarOptions:
    """Enable task and plan syntax only on runtimes that know the ``tasks`` setting."""
    return GrammarOptions(tasks=tasks and runtime.supports("tasks"))


class PuppetParser:
    """Implements the Puppet language parser for one source file."""

    def __init__(
        self,
        source: str,
        filename: str,
        settings: Optional[Settings] = None,
        runtime: Optional[RuntimeSettings] = None,
        logger: Optional[ContextLoggerAdapter] = None,
        tasks: bool = True,
    ):
        """
        Initialize the parser.

        Args:
            source: The source being parsed
            filename: The file name of the file being parsed
            settings: Extractor settings; defaults to the environment-loaded ones
            runtime: Hosting runtime settings; defaults to the environment-loaded ones
            logger: Logger for skip warnings and parse failures
            tasks: Request plan and task syntax; only honored if the runtime supports it
        """
        self.source = source
        self.file = str(filename)
        self.settings = settings or default_settings
        self.runtime = runtime or default_runtime_settings
        self.logger = logger or get_logger(__name__, file=self.file, language="puppet")
        self.tasks = tasks
        self.state = ParserState.UNPARSED
        self._result: Optional[ParseResult] = None

    def parse(self) -> "PuppetParser":
        """
        Parse the source.

        Subsequent calls return immediately with the result of the first one.

        Returns:
            The parser itself
        """
        if self._result is not None:
            return self

        self.state = ParserState.PARSING

        adapter = AstAdapter(grammar_options_for(self.runtime, self.tasks))
        outcome = adapter.parse(self.source, self.file)
        if not outcome.ok:
            log_parse_failure(self.logger, self.file, outcome.error.message)
            self._result = ParseResult(error=outcome.error)
            self.state = ParserState.FAILED
            return self

        gate = PlanGate(
            runtime_version=self.runtime.version,
            minimum_version=self.settings.minimum_plan_version,
            path_pattern=self.settings.plans_path_pattern,
        )
        visitor = DeclarationVisitor(
            self.file, gate=gate, max_blank_lines=self.settings.max_blank_lines, log=self.logger
        )
        self._result = ParseResult(statements=tuple(visitor.visit(outcome.root)))
        self.state = ParserState.PARSED
        return self

    @property
    def result(self) -> ParseResult:
        """The parse result; parses on first access."""
        if self._result is None:
            self.parse()
        return self._result

    @property
    def statements(self) -> Tuple[Statement, ...]:
        return self.result.statements

    @property
    def error(self) -> Optional[ParseError]:
        return self.result.error

    def enumerator(self) -> Tuple[Statement, ...]:
        """Gets the statements that were parsed."""
        return self.statements


def parse_source(
    source: str,
    filename: str,
    settings: Optional[Settings] = None,
    runtime: Optional[RuntimeSettings] = None,
) -> ParseResult:
    """Parse one manifest and return its result."""
    return PuppetParser(source, filename, settings=settings, runtime=runtime).parse().result
