from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hindi.lexer import Loc


class CompilerError(Exception):
    def __init__(self, msg: str, loc: Loc | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.loc = loc

    def __str__(self) -> str:
        return f"{self.loc} {self.msg}" if self.loc else self.msg


class LexError(CompilerError):
    ...


class ParseError(CompilerError):
    ...


class CodeGenError(CompilerError):
    ...


class ExecutionError(CompilerError):
    ...
