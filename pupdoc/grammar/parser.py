"""
Recursive-descent parser for the definition level of Puppet manifests.

Definitions (classes, defined types, functions, plans, type aliases and node
definitions) are parsed into typed AST nodes. Their bodies and every other
top-level construct are only checked for balanced brackets and kept as
source text, which is all documentation extraction needs.
"""

from typing import List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict

from pupdoc.grammar.errors import PuppetSyntaxError
from pupdoc.grammar.lexer import (
    CLASSREF,
    EOF,
    NAME,
    REGEX,
    STRING,
    VARIABLE,
    Token,
    tokenize,
)
from pupdoc.models.ast_node import (
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

_CLOSERS = {"(": ")", "[": "]", "{": "}"}


class GrammarOptions(BaseModel):
    """Language features the grammar recognizes."""

    model_config = ConfigDict(frozen=True)

    tasks: bool = False


class Parser:
    """Parses Puppet source text into an AST rooted at a Factory node."""

    def __init__(self, options: Optional[GrammarOptions] = None):
        self.options = options or GrammarOptions()
        self._text = ""
        self._tokens: List[Token] = []
        self._index = 0

    def parse_string(self, text: str) -> Factory:
        """
        Parse a manifest.

        Args:
            text: Complete source text

        Returns:
            Factory node wrapping the Program

        Raises:
            PuppetSyntaxError: If the text is not a valid manifest
        """
        self._text = text
        self._tokens = tokenize(text)
        self._index = 0

        definitions: List[ASTNode] = []
        while self._peek().type != EOF:
            if self._at_definition():
                definitions.append(self._definition())
            else:
                definitions.append(self._expression())

        program = Program(line=1, offset=0, length=len(text), definitions=tuple(definitions), source_text=text)
        return Factory(line=1, offset=0, length=len(text), current=program)

    # Token helpers

    def _peek(self, ahead: int = 0) -> Token:
        index = min(self._index + ahead, len(self._tokens) - 1)
        return self._tokens[index]

    def _next(self) -> Token:
        token = self._peek()
        if token.type != EOF:
            self._index += 1
        return token

    def _error(self, token: Token) -> PuppetSyntaxError:
        if token.type == EOF:
            return PuppetSyntaxError("Syntax error at end of input", token.line, token.column)
        return PuppetSyntaxError(f"Syntax error at '{token.value}'", token.line, token.column)

    def _expect(self, type_: str, value: Optional[str] = None) -> Token:
        token = self._peek()
        if token.type != type_ or (value is not None and token.value != value):
            raise self._error(token)
        return self._next()

    def _at_keyword(self, keyword: str, ahead: int = 0) -> bool:
        token = self._peek(ahead)
        return token.type == NAME and token.value == keyword

    def _skip_balanced(self, stop: Set[str]) -> Token:
        """
        Consume tokens up to the first token in ``stop`` found outside brackets.

        Returns:
            The last consumed token

        Raises:
            PuppetSyntaxError: On mismatched brackets or end of input inside brackets
        """
        stack: List[str] = []
        last = self._peek()
        while True:
            token = self._peek()
            if token.type == EOF:
                if stack:
                    raise self._error(token)
                return last
            if not stack and token.type in stop:
                return last
            if token.type in _CLOSERS:
                stack.append(_CLOSERS[token.type])
            elif token.type in (")", "]", "}"):
                if not stack or stack.pop() != token.type:
                    raise self._error(token)
            last = self._next()

    # Definitions

    def _at_definition(self) -> bool:
        token = self._peek()
        if token.type != NAME:
            return False
        following = self._peek(1)
        if token.value in ("class", "define", "function"):
            return following.type == NAME
        if token.value == "plan":
            return self.options.tasks and following.type == NAME
        if token.value == "type":
            return following.type == CLASSREF and self._peek(2).type == "="
        if token.value == "node":
            return following.type in (STRING, NAME, REGEX)
        return False

    def _definition(self) -> ASTNode:
        keyword = self._peek().value
        if keyword == "class":
            return self._class()
        if keyword == "define":
            return self._define()
        if keyword == "function":
            return self._function()
        if keyword == "plan":
            return self._plan()
        if keyword == "type":
            return self._type_alias()
        return self._node()

    def _span(self, start: Token, end: Token) -> dict:
        return {"line": start.line, "offset": start.offset, "length": end.end - start.offset}

    def _class(self) -> HostClassDefinition:
        start = self._next()
        name = self._expect(NAME).value
        parameters = self._parameters()
        parent = None
        if self._at_keyword("inherits"):
            self._next()
            parent_token = self._peek()
            if parent_token.type not in (NAME, STRING):
                raise self._error(parent_token)
            parent = self._next().value
        body, end = self._block()
        return HostClassDefinition(
            name=name, parameters=parameters, parent_class=parent, body=body, **self._span(start, end)
        )

    def _define(self) -> ResourceTypeDefinition:
        start = self._next()
        name = self._expect(NAME).value
        parameters = self._parameters()
        body, end = self._block()
        return ResourceTypeDefinition(name=name, parameters=parameters, body=body, **self._span(start, end))

    def _function(self) -> FunctionDefinition:
        start = self._next()
        name = self._expect(NAME).value
        parameters = self._parameters()
        return_type = None
        if self._peek().type == ">>":
            self._next()
            return_type = self._type_expression()
        body, end = self._block()
        return FunctionDefinition(
            name=name, parameters=parameters, return_type=return_type, body=body, **self._span(start, end)
        )

    def _plan(self) -> PlanDefinition:
        start = self._next()
        name = self._expect(NAME).value
        parameters = self._parameters()
        body, end = self._block()
        return PlanDefinition(name=name, parameters=parameters, body=body, **self._span(start, end))

    def _type_alias(self) -> TypeAlias:
        start = self._next()
        name = self._expect(CLASSREF).value
        self._expect("=")
        type_expr = self._type_expression(allow_hash=True)
        end = self._tokens[self._index - 1]
        return TypeAlias(name=name, type_expr=type_expr, **self._span(start, end))

    def _node(self) -> NodeDefinition:
        start = self._next()
        matches = [self._host_match()]
        while self._peek().type == ",":
            self._next()
            if self._peek().type == "{":
                break
            matches.append(self._host_match())
        parent = None
        if self._at_keyword("inherits"):
            self._next()
            parent = self._host_match()
        body, end = self._block()
        return NodeDefinition(host_matches=tuple(matches), parent=parent, body=body, **self._span(start, end))

    def _host_match(self) -> str:
        token = self._peek()
        if token.type not in (STRING, NAME, REGEX):
            raise self._error(token)
        return self._next().value

    def _block(self):
        """Parse ``{ ... }`` and return the inner text and the closing brace token."""
        opening = self._expect("{")
        self._skip_balanced({"}"})
        closing = self._expect("}")
        return self._text[opening.end:closing.offset], closing

    def _parameters(self) -> Tuple[Parameter, ...]:
        if self._peek().type != "(":
            return ()
        self._next()
        parameters: List[Parameter] = []
        while self._peek().type != ")":
            parameters.append(self._parameter())
            if self._peek().type == ",":
                self._next()
            elif self._peek().type != ")":
                raise self._error(self._peek())
        self._next()
        return tuple(parameters)

    def _parameter(self) -> Parameter:
        type_expr = None
        if self._peek().type == CLASSREF:
            type_expr = self._type_expression()
        captures_rest = False
        if self._peek().type == "*":
            self._next()
            captures_rest = True
        name = self._expect(VARIABLE).value[1:]
        value = None
        if self._peek().type == "=":
            self._next()
            first = self._peek()
            if first.type in (",", ")"):
                raise self._error(first)
            last = self._skip_balanced({",", ")"})
            value = self._text[first.offset:last.end]
        return Parameter(name=name, type_expr=type_expr, value=value, captures_rest=captures_rest)

    def _type_expression(self, allow_hash: bool = False) -> str:
        """Parse ``Type``, ``Type[...]``, ``Type {...}`` or (when allowed) ``{...}``; return its source text."""
        first = self._peek()
        if first.type == CLASSREF:
            last = self._next()
            if self._peek().type == "[" and self._peek().offset == last.end:
                last = self._bracketed("[")
            if allow_hash and self._peek().type == "{":
                last = self._bracketed("{")
        elif allow_hash and first.type in ("{", "["):
            last = self._bracketed(first.type)
        else:
            raise self._error(first)
        return self._text[first.offset:last.end]

    def _bracketed(self, opener: str) -> Token:
        self._expect(opener)
        self._skip_balanced({_CLOSERS[opener]})
        return self._expect(_CLOSERS[opener])

    # Everything else

    def _expression(self) -> Expression:
        """Consume a run of non-definition tokens up to the next definition or end of input."""
        start = self._peek()
        stack: List[str] = []
        last = start
        while True:
            token = self._peek()
            if token.type == EOF:
                if stack:
                    raise self._error(token)
                break
            if not stack and token is not start and self._at_definition():
                break
            if token.type in _CLOSERS:
                stack.append(_CLOSERS[token.type])
            elif token.type in (")", "]", "}"):
                if not stack or stack.pop() != token.type:
                    raise self._error(token)
            last = self._next()
        return Expression(**self._span(start, last))


def parse_string(text: str, options: Optional[GrammarOptions] = None) -> Factory:
    """Parse Puppet source text with a fresh parser."""
    return Parser(options).parse_string(text)
