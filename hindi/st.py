from __future__ import annotations

from dataclasses import dataclass, field

from hindi.lexer import Loc


@dataclass
class Node:
    # Locations are for error reporting only, two trees parsed from the
    # same text compare equal wherever they came from
    loc: Loc | None = field(default=None, compare=False, repr=False, kw_only=True)


@dataclass
class Program:
    statements: list[Statement]


@dataclass
class Declaration(Node):
    name: Identifier
    initializer: Expression | None


@dataclass
class Print(Node):
    argument: Expression


@dataclass
class IfStatement(Node):
    condition: Expression
    body: list[Statement]


@dataclass
class Literal(Node):
    value: int


@dataclass
class Identifier(Node):
    name: str


@dataclass
class BinaryExpression(Node):
    left: Expression
    operator: str
    right: Expression


@dataclass
class ConditionalExpression(Node):
    test: Expression
    consequent: Expression
    alternate: Expression


Statement = Declaration | Print | IfStatement
Expression = Literal | Identifier | BinaryExpression | ConditionalExpression
