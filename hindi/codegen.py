from __future__ import annotations

import logging

from hindi.errors import CodeGenError
from hindi.parser import PRECEDENCE, BINARY_OPERATORS
import hindi.st as st


INDENT = "  "

# Leaves never need parentheses
ATOM_PRECEDENCE = 100


class CodeGenerator:
    """Turns a syntax tree into JavaScript source text"""

    logger = logging.getLogger(__name__)

    def generate(self, program: st.Program) -> str:
        if not isinstance(program, st.Program):
            raise CodeGenError(f"Expected a Program but got {type(program).__name__} instead.")

        self.logger.debug("Generating code for %d statements", len(program.statements))
        return "\n".join(self.gen_statement(stmt) for stmt in program.statements)

    def gen_statement(self, stmt: st.Statement) -> str:
        if isinstance(stmt, st.Declaration):
            value = "undefined" if stmt.initializer is None else self.gen_expression(stmt.initializer)
            return f"const {stmt.name.name} = {value};"

        elif isinstance(stmt, st.Print):
            return f"console.log({self.gen_expression(stmt.argument)});"

        elif isinstance(stmt, st.IfStatement):
            lines = [f"if ({self.gen_expression(stmt.condition)}) {{"]
            for inner in stmt.body:
                lines.extend(INDENT + line for line in self.gen_statement(inner).split("\n"))
            lines.append("}")
            return "\n".join(lines)

        raise CodeGenError(f"Unknown statement type {type(stmt).__name__}.", getattr(stmt, "loc", None))

    def gen_expression(self, expr: st.Expression) -> str:
        if isinstance(expr, st.Literal):
            return str(expr.value)

        elif isinstance(expr, st.Identifier):
            return expr.name

        elif isinstance(expr, st.BinaryExpression):
            if expr.operator not in BINARY_OPERATORS:
                raise CodeGenError(f"Unknown operator '{expr.operator}'.", expr.loc)

            prec = PRECEDENCE[expr.operator]
            left = self._gen_operand(expr.left, prec, right_side=False)
            right = self._gen_operand(expr.right, prec, right_side=True)
            return f"{left} {expr.operator} {right}"

        elif isinstance(expr, st.ConditionalExpression):
            # Anything other than a leaf in the test was parenthesised in the source
            test = self._gen_operand(expr.test, ATOM_PRECEDENCE, right_side=False)
            consequent = self.gen_expression(expr.consequent)
            alternate = self.gen_expression(expr.alternate)
            return f"{test} ? {consequent} : {alternate}"

        raise CodeGenError(f"Unknown expression type {type(expr).__name__}.", getattr(expr, "loc", None))

    def _gen_operand(self, expr: st.Expression, parent_prec: int, right_side: bool) -> str:
        text = self.gen_expression(expr)
        prec = self._precedence(expr)

        # Binary operators are left associative, so an equal precedence operand
        # on the right only exists if the source grouped it explicitly
        if prec < parent_prec or (right_side and prec == parent_prec):
            return f"({text})"
        return text

    @staticmethod
    def _precedence(expr: st.Expression) -> int:
        if isinstance(expr, st.BinaryExpression):
            return PRECEDENCE[expr.operator]
        if isinstance(expr, st.ConditionalExpression):
            return PRECEDENCE["?"]
        return ATOM_PRECEDENCE


def generate(program: st.Program) -> str:
    return CodeGenerator().generate(program)
