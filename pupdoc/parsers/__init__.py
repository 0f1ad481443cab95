"""
Documentation parsers for Puppet manifests.
"""

from pupdoc.parsers.adapter import AstAdapter
from pupdoc.parsers.docstring import Docstring, extract_docstring
from pupdoc.parsers.parser import ParserState, PuppetParser, parse_source
from pupdoc.parsers.source_text import SourceUnit
from pupdoc.parsers.visitor import DeclarationVisitor, PlanGate

__all__ = [
    "AstAdapter",
    "DeclarationVisitor",
    "Docstring",
    "ParserState",
    "PlanGate",
    "PuppetParser",
    "SourceUnit",
    "extract_docstring",
    "parse_source",
]
