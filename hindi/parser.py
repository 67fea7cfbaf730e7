from __future__ import annotations

import logging

from hindi.errors import ParseError
from hindi.lexer import Token, TokenType, Loc
import hindi.st as st


# '?' and ':' sit at the bottom of the table, but only the ternary branch of
# parse_expression ever consumes them
PRECEDENCE = {
    "?": 1, ":": 1,
    "==": 2, "!=": 2,
    "<": 3, ">": 3, "<=": 3, ">=": 3,
    "+": 4, "-": 4,
    "*": 5, "/": 5,
}

BINARY_OPERATORS = {op for op, prec in PRECEDENCE.items() if prec > 1}


class Parser:
    logger = logging.getLogger(__name__)

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> st.Program:
        # program ::= statement*
        self.logger.debug("Parsing %d tokens", len(self._tokens))

        statements = []
        while self._has_more():
            statements.append(self.parse_statement())

        self.logger.debug("Parsed %d top level statements", len(statements))
        return st.Program(statements)

    def parse_statement(self) -> st.Statement:
        # statement ::= declaration | print | if_stmt
        current = self._peek()

        if self._at_keyword("ye"):
            return self.parse_declaration()

        if self._at_keyword("bol"):
            return self.parse_print()

        if self._at_keyword("if"):
            return self.parse_if()

        raise ParseError(f"Unexpected token {self._describe(current)}.", self._loc())

    def parse_declaration(self) -> st.Declaration:
        # declaration ::= "ye" identifier ["=" expr]
        start = self._expect_keyword("ye")

        name = self._peek()
        if name is None or name.typ is not TokenType.IDENTIFIER:
            raise ParseError(
                f"Expected identifier after 'ye' but got {self._describe(name)} instead.", self._loc())
        self._advance()

        initializer = None
        if self._at_operator("="):
            self._advance()
            initializer = self.parse_expression()

        return st.Declaration(st.Identifier(name.lexeme, loc=name.loc), initializer, loc=start.loc)

    def parse_print(self) -> st.Print:
        # print ::= "bol" expr
        start = self._expect_keyword("bol")
        return st.Print(self.parse_expression(), loc=start.loc)

    def parse_if(self) -> st.IfStatement:
        # if_stmt ::= "if" "(" expr ")" "{" statement* "}"
        start = self._expect_keyword("if")
        self._expect_operator("(")
        condition = self.parse_expression()
        self._expect_operator(")")
        self._expect_delimiter("{", "after if condition")

        body = []
        while self._has_more() and not self._at_delimiter("}"):
            body.append(self.parse_statement())

        self._expect_delimiter("}", "to close if block")
        return st.IfStatement(condition, body, loc=start.loc)

    def parse_expression(self) -> st.Expression:
        # expr ::= primary "?" expr ":" expr | primary (binop primary)*
        left = self.parse_primary()

        # The test of a conditional is a lone primary, `a > b ? ...` does not
        # make `a > b` the test
        if self._at_operator("?"):
            question = self._advance()
            consequent = self.parse_expression()
            self._expect_operator(":")
            alternate = self.parse_expression()
            return st.ConditionalExpression(left, consequent, alternate, loc=question.loc)

        return self.parse_binary(left)

    def parse_binary(self, left: st.Expression, min_prec: int = 0) -> st.Expression:
        while (prec := self._binary_precedence()) > 0:
            if prec < min_prec:
                break

            op = self._advance()
            right = self.parse_primary()

            # Anything that binds tighter than `op` belongs to its right operand
            while (next_prec := self._binary_precedence()) > prec:
                right = self.parse_binary(right, next_prec)

            left = st.BinaryExpression(left, op.lexeme, right, loc=op.loc)

        return left

    def parse_primary(self) -> st.Expression:
        # primary ::= number | identifier | "(" expr ")"
        current = self._peek()

        if current is None:
            raise ParseError("Expected expression but got end of input instead.", self._loc())

        if current.typ is TokenType.NUMBER:
            self._advance()
            return st.Literal(current.value, loc=current.loc)

        if current.typ is TokenType.IDENTIFIER:
            self._advance()
            return st.Identifier(current.lexeme, loc=current.loc)

        if self._at_operator("("):
            self._advance()
            expr = self.parse_expression()
            self._expect_operator(")")
            return expr

        raise ParseError(f"Expected expression but got {self._describe(current)} instead.", self._loc())

    def _binary_precedence(self) -> int:
        current = self._peek()
        if current is None or current.typ is not TokenType.OPERATOR:
            return 0
        if current.lexeme not in BINARY_OPERATORS:
            return 0
        return PRECEDENCE[current.lexeme]

    def _expect_keyword(self, lexeme: str) -> Token:
        return self._expect(TokenType.KEYWORD, lexeme)

    def _expect_operator(self, lexeme: str) -> Token:
        return self._expect(TokenType.OPERATOR, lexeme)

    def _expect_delimiter(self, lexeme: str, context: str) -> Token:
        return self._expect(TokenType.DELIMITER, lexeme, f" {context}")

    def _expect(self, typ: TokenType, lexeme: str, context: str = "") -> Token:
        current = self._peek()
        if current is not None and current.typ is typ and current.lexeme == lexeme:
            return self._advance()

        raise ParseError(
            f"Expected {typ.name} '{lexeme}'{context} but got {self._describe(current)} instead.", self._loc())

    def _at_keyword(self, lexeme: str) -> bool:
        return self._at(TokenType.KEYWORD, lexeme)

    def _at_operator(self, lexeme: str) -> bool:
        return self._at(TokenType.OPERATOR, lexeme)

    def _at_delimiter(self, lexeme: str) -> bool:
        return self._at(TokenType.DELIMITER, lexeme)

    def _at(self, typ: TokenType, lexeme: str) -> bool:
        current = self._peek()
        return current is not None and current.typ is typ and current.lexeme == lexeme

    def _has_more(self) -> bool:
        return self._pos < len(self._tokens)

    def _peek(self) -> Token | None:
        return self._tokens[self._pos] if self._has_more() else None

    def _advance(self) -> Token:
        current = self._tokens[self._pos]
        self._pos += 1
        return current

    def _loc(self) -> Loc | None:
        if self._has_more():
            return self._tokens[self._pos].loc

        # Past the end, point just after the last token
        if not self._tokens:
            return None
        last = self._tokens[-1]
        return Loc(last.loc.file, last.loc.row, last.loc.col + len(last.lexeme))

    @staticmethod
    def _describe(token: Token | None) -> str:
        return token.for_error() if token is not None else "end of input"


def parse(tokens: list[Token]) -> st.Program:
    return Parser(tokens).parse()
