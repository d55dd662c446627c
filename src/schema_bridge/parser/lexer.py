"""
Tokenizer for Zod-style schema source text.

Produces identifiers, string/number/regex literals and punctuation, each
tagged with its 1-based line and column. Comments and whitespace are skipped.
"""
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import SchemaSyntaxError


class TokenType(str, Enum):
    IDENT = "identifier"
    STRING = "string"
    NUMBER = "number"
    REGEX = "regex"
    PUNCT = "punctuation"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any
    line: int
    column: int

    def describe(self) -> str:
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING:
            return f"string {self.value!r}"
        return f"'{self.value}'" if self.type == TokenType.PUNCT else f"{self.type.value} '{self.value}'"


PUNCTUATION = set(".,:;()[]{}")

_IDENT_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_WHITESPACE_RE = re.compile(r"[ \t\r\n\f\v]+")

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self._skip_trivia()
            if self.pos >= len(self.source):
                tokens.append(Token(TokenType.EOF, None, self.line, self.column))
                return tokens
            tokens.append(self._next_token())

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> SchemaSyntaxError:
        return SchemaSyntaxError(message, line or self.line, column or self.column)

    def _advance(self, count: int = 1) -> str:
        text = self.source[self.pos:self.pos + count]
        for char in text:
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += count
        return text

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else ""

    def _skip_trivia(self) -> None:
        while self.pos < len(self.source):
            match = _WHITESPACE_RE.match(self.source, self.pos)
            if match:
                self._advance(match.end() - self.pos)
                continue
            if self.source.startswith("//", self.pos):
                end = self.source.find("\n", self.pos)
                self._advance((len(self.source) if end == -1 else end) - self.pos)
                continue
            if self.source.startswith("/*", self.pos):
                line, column = self.line, self.column
                end = self.source.find("*/", self.pos + 2)
                if end == -1:
                    raise self._error("Unterminated block comment", line, column)
                self._advance(end + 2 - self.pos)
                continue
            return

    def _next_token(self) -> Token:
        line, column = self.line, self.column
        char = self._peek()

        if char in ("'", '"', "`"):
            return Token(TokenType.STRING, self._read_string(char), line, column)

        if char == "/":
            return Token(TokenType.REGEX, self._read_regex(), line, column)

        match = _NUMBER_RE.match(self.source, self.pos)
        if match and (char.isdigit() or (char == "-" and self._peek(1).isdigit())):
            text = self._advance(match.end() - self.pos)
            if _IDENT_RE.match(self._peek()) or self._peek().isdigit():
                raise self._error(f"Invalid number literal '{text}{self._peek()}'", line, column)
            try:
                value: int | float = float(text) if any(c in text for c in ".eE") else int(text)
            except ValueError:
                # int() refuses digit strings beyond sys.get_int_max_str_digits()
                raise self._error(f"Invalid number literal ({len(text)} characters is too long)", line, column) from None
            return Token(TokenType.NUMBER, value, line, column)

        match = _IDENT_RE.match(self.source, self.pos)
        if match:
            return Token(TokenType.IDENT, self._advance(match.end() - self.pos), line, column)

        if char in PUNCTUATION:
            return Token(TokenType.PUNCT, self._advance(), line, column)

        raise self._error(f"Unexpected character {char!r}", line, column)

    def _read_string(self, quote: str) -> str:
        line, column = self.line, self.column
        self._advance()
        chars: list[str] = []
        while True:
            char = self._peek()
            if not char:
                raise self._error("Unterminated string literal", line, column)
            if char == quote:
                self._advance()
                return "".join(chars)
            if char == "\n" and quote != "`":
                raise self._error("Unterminated string literal", line, column)
            if quote == "`" and char == "$" and self._peek(1) == "{":
                raise self._error("Template literal interpolation is not supported")
            if char == "\\":
                chars.append(self._read_escape())
                continue
            chars.append(self._advance())

    def _read_escape(self) -> str:
        line, column = self.line, self.column
        self._advance()
        char = self._advance()
        if not char:
            raise self._error("Unterminated string literal", line, column)
        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]
        if char == "\n":
            return "" # Line continuation
        if char == "x":
            return chr(self._code_point(self._advance(2), line, column))
        if char == "u":
            code = self._read_unicode_escape(line, column)
            if _HIGH_SURROGATES.start <= code < _HIGH_SURROGATES.stop and self.source.startswith("\\u", self.pos):
                # UTF-16 surrogate pair written as two escapes
                pair_line, pair_column = self.line, self.column
                self._advance(2)
                low = self._read_unicode_escape(pair_line, pair_column)
                if not _LOW_SURROGATES.start <= low < _LOW_SURROGATES.stop:
                    raise self._error("Unpaired surrogate in unicode escape", line, column)
                code = 0x10000 + ((code - _HIGH_SURROGATES.start) << 10) + (low - _LOW_SURROGATES.start)
            if _HIGH_SURROGATES.start <= code < _LOW_SURROGATES.stop:
                raise self._error("Unpaired surrogate in unicode escape", line, column)
            return chr(code)
        return char

    def _read_unicode_escape(self, line: int, column: int) -> int:
        """Read the part after ``\\u``: four hex digits or a braced code point."""
        if self._peek() != "{":
            return self._code_point(self._advance(4), line, column)
        self._advance()
        end = self.source.find("}", self.pos)
        if end == -1:
            raise self._error("Invalid unicode escape", line, column)
        digits = self._advance(end - self.pos)
        self._advance()
        return self._code_point(digits, line, column)

    def _code_point(self, digits: str, line: int, column: int) -> int:
        if not digits or not re.fullmatch(r"[0-9A-Fa-f]+", digits):
            raise self._error("Invalid escape sequence", line, column)
        code = int(digits, 16)
        if code > sys.maxunicode:
            raise self._error("Invalid escape sequence", line, column)
        return code

    def _read_regex(self) -> str:
        line, column = self.line, self.column
        self._advance()
        chars: list[str] = []
        in_class = False
        while True:
            char = self._peek()
            if not char or char == "\n":
                raise self._error("Unterminated regular expression literal", line, column)
            if char == "\\":
                chars.append(self._advance(2))
                continue
            if char == "[":
                in_class = True
            elif char == "]":
                in_class = False
            elif char == "/" and not in_class:
                self._advance()
                break
            chars.append(self._advance())
        # Flags are accepted but not kept; only the pattern source is recorded
        while self._peek().isalpha():
            self._advance()
        pattern = "".join(chars)
        if not pattern:
            raise self._error("Empty regular expression literal", line, column)
        return pattern


def tokenize(source: str) -> list[Token]:
    return Lexer(source).tokenize()
