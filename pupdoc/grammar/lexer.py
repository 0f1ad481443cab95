"""
Tokenizer for Puppet manifests.

Produces a flat list of tokens with source offsets. Comments are dropped,
strings, heredocs and regular expressions are kept as single opaque tokens so
that brackets inside them never affect bracket balancing in the parser.
"""

import re
from typing import List, NamedTuple, Optional, Tuple

from pupdoc.grammar.errors import PuppetSyntaxError


class Token(NamedTuple):
    """A lexical token."""

    type: str
    value: str
    offset: int
    end: int
    line: int
    column: int


NAME = "NAME"
CLASSREF = "CLASSREF"
VARIABLE = "VARIABLE"
NUMBER = "NUMBER"
STRING = "STRING"
HEREDOC = "HEREDOC"
REGEX = "REGEX"
EOF = "EOF"

_WORD_RE = re.compile(r"(?:::)?[A-Za-z_]\w*(?:::[A-Za-z_]\w*)*")
_VARIABLE_RE = re.compile(r"\$(?:::)?(?:\w+::)*\w+")
_NUMBER_RE = re.compile(r"0[xX][0-9A-Fa-f]+|\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")
_REGEX_RE = re.compile(r"/(?:[^/\n\\]|\\.)*/")
_HEREDOC_RE = re.compile(
    r'@\(\s*(?P<quote>"?)(?P<tag>[^":/)\r\n]+?)(?P=quote)\s*'
    r'(?::\s*[A-Za-z0-9_+]+\s*)?(?:/\s*[\w$]*\s*)?\)'
)

# Longest operators first so that "<<|" wins over "<<" and "<".
_OPERATORS = [
    "<<|", "|>>",
    "=>", "+>", "->", "~>", "<-", "<~", "==", "!=", ">=", "<=", ">>", "<<",
    "=~", "!~", "<|", "|>", "+=", "-=",
]
_SINGLE = set("{}[]()=,:;.|@?!*+-/%<>~&^")

# After these tokens a "/" is a division operator, not the start of a regex.
_VALUE_TYPES = {NAME, CLASSREF, VARIABLE, NUMBER, STRING, HEREDOC, REGEX, ")", "]"}
_REGEX_KEYWORDS = {"node", "and", "or", "in", "if", "elsif", "unless", "case", "when"}


class Lexer:
    """Splits Puppet source text into tokens."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._line = 1
        self._line_start = 0
        self._tokens: List[Token] = []
        self._pending_heredocs: List[Tuple[str, int, int]] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the whole text.

        Returns:
            List of tokens terminated by an EOF token

        Raises:
            PuppetSyntaxError: On unterminated strings, comments or heredocs
                and on characters that cannot start a token
        """
        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]

            if ch == "\n":
                self._newline()
            elif ch in " \t\r\f\v":
                self._pos += 1
            elif ch == "#":
                end = text.find("\n", self._pos)
                self._pos = len(text) if end < 0 else end
            elif text.startswith("/*", self._pos):
                self._block_comment()
            elif ch == "'":
                self._single_quoted()
            elif ch == '"':
                self._double_quoted()
            elif text.startswith("@(", self._pos):
                self._heredoc_header()
            elif ch == "$":
                self._match(_VARIABLE_RE, VARIABLE, "Illegal variable name")
            elif ch.isdigit():
                self._match(_NUMBER_RE, NUMBER, "Illegal number")
            elif ch.isalpha() or ch == "_" or text.startswith("::", self._pos):
                self._word()
            elif ch == "/" and self._regex_allowed() and _REGEX_RE.match(text, self._pos):
                self._match(_REGEX_RE, REGEX, "Unterminated regular expression")
            else:
                self._operator()

        if self._pending_heredocs:
            tag, line, column = self._pending_heredocs[0]
            raise PuppetSyntaxError(f"Heredoc without any following lines of text for tag '{tag}'", line, column)

        self._tokens.append(Token(EOF, "", len(text), len(text), self._line, self._column(len(text))))
        return self._tokens

    def _column(self, pos: int) -> int:
        return pos - self._line_start + 1

    def _emit(self, type_: str, start: int, end: int, line: int, column: int) -> None:
        self._tokens.append(Token(type_, self._text[start:end], start, end, line, column))

    def _advance_to(self, end: int) -> None:
        """Move to ``end`` keeping line bookkeeping for any newlines crossed."""
        newlines = self._text.count("\n", self._pos, end)
        if newlines:
            self._line += newlines
            self._line_start = self._text.rfind("\n", self._pos, end) + 1
        self._pos = end

    def _newline(self) -> None:
        self._pos += 1
        self._line += 1
        self._line_start = self._pos
        if self._pending_heredocs:
            pending, self._pending_heredocs = self._pending_heredocs, []
            for tag, line, column in pending:
                self._heredoc_body(tag, line, column)

    def _match(self, pattern: "re.Pattern", type_: str, message: str) -> None:
        match = pattern.match(self._text, self._pos)
        if not match:
            raise PuppetSyntaxError(message, self._line, self._column(self._pos))
        self._emit(type_, self._pos, match.end(), self._line, self._column(self._pos))
        self._advance_to(match.end())

    def _word(self) -> None:
        match = _WORD_RE.match(self._text, self._pos)
        if not match:
            raise PuppetSyntaxError(
                f"Syntax error at '{self._text[self._pos:self._pos + 2]}'", self._line, self._column(self._pos)
            )
        word = match.group(0)
        type_ = CLASSREF if word.lstrip(":")[0].isupper() else NAME
        self._emit(type_, self._pos, match.end(), self._line, self._column(self._pos))
        self._pos = match.end()

    def _block_comment(self) -> None:
        end = self._text.find("*/", self._pos + 2)
        if end < 0:
            raise PuppetSyntaxError("Unclosed comment", self._line, self._column(self._pos))
        self._advance_to(end + 2)

    def _single_quoted(self) -> None:
        self._quoted("'", interpolate=False)

    def _double_quoted(self) -> None:
        self._quoted('"', interpolate=True)

    def _quoted(self, quote: str, interpolate: bool) -> None:
        text = self._text
        start, line, column = self._pos, self._line, self._column(self._pos)
        pos = start + 1
        depth = 0
        while pos < len(text):
            ch = text[pos]
            if ch == "\\":
                pos += 2
                continue
            if interpolate and text.startswith("${", pos):
                depth += 1
                pos += 2
                continue
            if depth and ch == "{":
                depth += 1
            elif depth and ch == "}":
                depth -= 1
            elif not depth and ch == quote:
                self._emit(STRING, start, pos + 1, line, column)
                self._advance_to(pos + 1)
                return
            pos += 1
        raise PuppetSyntaxError(f"Unclosed quote after {quote!r} followed by '{text[start + 1:start + 21]}'", line, column)

    def _heredoc_header(self) -> None:
        match = _HEREDOC_RE.match(self._text, self._pos)
        line, column = self._line, self._column(self._pos)
        if not match:
            raise PuppetSyntaxError("Invalid heredoc header", line, column)
        self._pending_heredocs.append((match.group("tag").strip(), line, column))
        self._emit(HEREDOC, self._pos, match.end(), line, column)
        self._pos = match.end()

    def _heredoc_body(self, tag: str, line: int, column: int) -> None:
        """Skip the heredoc text following the header line, including its end tag line."""
        end_re = re.compile(r"^[ \t]*(?:\|[ \t]*)?(?:-[ \t]*)?" + re.escape(tag) + r"[ \t]*\r?$", re.MULTILINE)
        match = end_re.search(self._text, self._pos)
        if not match:
            raise PuppetSyntaxError(f"Heredoc without end-tagged line for tag '{tag}'", line, column)
        end = match.end()
        if end < len(self._text) and self._text[end] == "\n":
            end += 1
        self._advance_to(end)

    def _regex_allowed(self) -> bool:
        previous: Optional[Token] = self._tokens[-1] if self._tokens else None
        if previous is None:
            return True
        if previous.type == NAME and previous.value in _REGEX_KEYWORDS:
            return True
        return previous.type not in _VALUE_TYPES

    def _operator(self) -> None:
        line, column = self._line, self._column(self._pos)
        for op in _OPERATORS:
            if self._text.startswith(op, self._pos):
                self._emit(op, self._pos, self._pos + len(op), line, column)
                self._pos += len(op)
                return
        ch = self._text[self._pos]
        if ch in _SINGLE:
            self._emit(ch, self._pos, self._pos + 1, line, column)
            self._pos += 1
            return
        raise PuppetSyntaxError(f"Illegal character '{ch}'", line, column)


def tokenize(text: str) -> List[Token]:
    """Tokenize Puppet source text."""
    return Lexer(text).tokenize()
