"""
Base interface for language-specific documentation parsers.

This module defines the abstract base class that every language plugin must
implement to extract documented statements from source files.
"""

from abc import ABC, abstractmethod
from typing import List

from pupdoc.models.parse_result import ParseResult


class LanguagePlugin(ABC):
    """Base interface for language-specific documentation parsers."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the language name (e.g., 'puppet')."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> List[str]:
        """Return supported file extensions (e.g., ['.pp'])."""
        pass

    @abstractmethod
    def parse_file(self, file_path: str, content: str) -> ParseResult:
        """
        Extract documented statements from a file.

        Args:
            file_path: Path to the file being parsed, relative to the module root
            content: File content as string

        Returns:
            ParseResult with the statements in source order, or the syntax
            error that prevented parsing. Implementations never raise for
            invalid source.
        """
        pass
