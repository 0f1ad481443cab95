"""
Boundary between the grammar and the documentation parser.

The grammar signals bad input by raising; this adapter turns that into a
``ParseOutcome`` so nothing raised by the grammar escapes into callers.
"""

import logging
from typing import Optional

from pupdoc.grammar import GrammarOptions, Parser, PuppetSyntaxError
from pupdoc.models.parse_result import ParseError, ParseOutcome

logger = logging.getLogger(__name__)


class AstAdapter:
    """Obtains an AST for Puppet source text."""

    def __init__(self, options: Optional[GrammarOptions] = None):
        self.options = options or GrammarOptions()

    def parse(self, source_text: str, file: str = "") -> ParseOutcome:
        """
        Parse source text into an AST.

        Args:
            source_text: Complete manifest text
            file: File identifier recorded on any error

        Returns:
            ParseOutcome holding either the root node or the syntax error
        """
        try:
            root = Parser(self.options).parse_string(source_text)
        except PuppetSyntaxError as e:
            logger.debug(f"Grammar rejected {file or 'source'}: {e}")
            return ParseOutcome(error=ParseError(message=str(e), file=file, line=e.line, column=e.column))
        return ParseOutcome(root=root)
