from __future__ import annotations

import logging
from enum import IntEnum, auto
from dataclasses import dataclass

from hindi.errors import LexError


logger = logging.getLogger(__name__)

KEYWORDS = {"ye", "bol", "if", "else"}
DIGITS = "0123456789"
DELIMITERS = {"{", "}"}
OPERATORS = {"+", "-", "*", "/", "=", "(", ")", "?", ":", "<", ">", "!"}

# These may be followed directly by '=' to form ==, <=, >= and !=
COMPOUND_STARTS = {"=", "<", ">", "!"}


class TokenType(IntEnum):
    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    DELIMITER = auto()
    OPERATOR = auto()


@dataclass(frozen=True)
class Loc:
    file: str
    row: int
    col: int

    def __repr__(self) -> str:
        return f"[{self.file} @ {self.row + 1}:{self.col + 1}]"


@dataclass(frozen=True)
class Token:
    typ: TokenType
    lexeme: str
    loc: Loc
    value: int | None = None

    def __repr__(self) -> str:
        return f"<{self.loc} {self.typ.name} '{self.lexeme}'>"

    def for_error(self) -> str:
        return f"{self.typ.name} '{self.lexeme}'"


class Lexer:
    def __init__(self, file_name: str, source: str) -> None:
        self._file_name, self._source = file_name, source
        self._pos, self._line, self._line_start = 0, 0, 0

    def lex(self) -> list[Token]:
        tokens = []
        while token := self._lex_one():
            tokens.append(token)

        logger.debug("Lexed %d tokens from %s", len(tokens), self._file_name)
        return tokens

    def _lex_one(self) -> Token | None:
        self._skip_spaces()
        loc = self._loc()

        if not self._has_more():
            return None

        char = self._current()

        if char.isascii() and char.isalpha():
            word = self._lex_word()
            typ = TokenType.KEYWORD if self.is_keyword(word) else TokenType.IDENTIFIER
            return Token(typ, word, loc)

        if char in DIGITS:
            digits = self._lex_number()
            try:
                value = int(digits)
            except ValueError:
                raise LexError(f"Number literal too long ({len(digits)} digits).", loc) from None
            return Token(TokenType.NUMBER, digits, loc, value)

        if char in DELIMITERS:
            self._pos += 1
            return Token(TokenType.DELIMITER, char, loc)

        if char in OPERATORS:
            return Token(TokenType.OPERATOR, self._lex_operator(), loc)

        raise LexError(f"Unexpected character '{char}'.", loc)

    def _lex_word(self) -> str:
        start = self._pos
        while self._has_more() and self._is_word_char():
            self._pos += 1
        return self._source[start:self._pos]

    def _lex_number(self) -> str:
        start = self._pos
        while self._has_more() and self._is_digit():
            self._pos += 1
        return self._source[start:self._pos]

    def _lex_operator(self) -> str:
        start = self._pos
        self._pos += 1

        if self._source[start] in COMPOUND_STARTS and self._has_more() and self._current() == "=":
            self._pos += 1

        return self._source[start:self._pos]

    def _skip_spaces(self) -> None:
        while self._has_more() and self._is_space():
            if self._current() == "\n":
                self._line += 1
                self._line_start = self._pos + 1
            self._pos += 1

    def _current(self) -> str:
        return self._source[self._pos]

    def _has_more(self) -> bool:
        return self._pos < len(self._source)

    def _is_space(self) -> bool:
        return self._current().isspace()

    # Words and numbers are ASCII only
    def _is_word_char(self) -> bool:
        return self._current().isascii() and self._current().isalnum()

    def _is_digit(self) -> bool:
        return self._current() in DIGITS

    @staticmethod
    def is_keyword(word: str) -> bool:
        return word in KEYWORDS

    def _loc(self) -> Loc:
        return Loc(self._file_name, self._line, self._pos - self._line_start)


def tokenize(source: str, file_name: str = "<input>") -> list[Token]:
    return Lexer(file_name, source).lex()
