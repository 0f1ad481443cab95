"""
Puppet language grammar.

Turns manifest source text into the AST models in ``pupdoc.models.ast_node``.
"""

from pupdoc.grammar.errors import PuppetSyntaxError
from pupdoc.grammar.lexer import Lexer, Token, tokenize
from pupdoc.grammar.parser import GrammarOptions, Parser, parse_string

__all__ = [
    "GrammarOptions",
    "Lexer",
    "Parser",
    "PuppetSyntaxError",
    "Token",
    "parse_string",
    "tokenize",
]
