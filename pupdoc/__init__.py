"""
pupdoc: documentation extraction for Puppet manifests.
"""

from pupdoc.models import ParseError, ParseResult
from pupdoc.parsers import PuppetParser, parse_source

__version__ = "0.1.0"

__all__ = ["ParseError", "ParseResult", "PuppetParser", "parse_source"]
