from __future__ import annotations

import logging
import math
from collections import ChainMap
from typing import Callable

from hindi.errors import ExecutionError
import hindi.st as st


Value = int | float | bool | None

# Uninitialised declarations hold None, which prints as the host's sentinel
UNDEFINED = None

# Held by names declared further down the current block, like a JavaScript
# `const` before its declaration runs
UNINITIALISED = object()

ARITHMETIC_OPERATORS = {"+", "-", "*", "/"}


class Executor:
    def execute(self, program: st.Program) -> list[str]:
        """Runs the program and returns everything it printed, one entry per line"""
        _ = program
        raise NotImplementedError("Executor must be a derived class representing a backend")


class Interpreter(Executor):
    """Walks the syntax tree directly, printed lines are captured rather than
    written to stdout. A sink, if given, also receives each line as it is
    printed.
    """

    logger = logging.getLogger(__name__)

    def __init__(self, sink: Callable[[str], None] | None = None) -> None:
        self._sink = sink
        self._output: list[str] = []

    def execute(self, program: st.Program) -> list[str]:
        self._output = []
        self.logger.debug("Interpreting %d statements", len(program.statements))

        self.exec_block(program.statements, ChainMap())
        return self._output

    def exec_block(self, statements: list[st.Statement], env: ChainMap) -> None:
        for stmt in statements:
            if isinstance(stmt, st.Declaration):
                name = stmt.name.name
                if name in env.maps[0]:
                    raise ExecutionError(f"Identifier '{name}' has already been declared.", stmt.loc)
                env.maps[0][name] = UNINITIALISED

        for stmt in statements:
            self.exec_statement(stmt, env)

    def exec_statement(self, stmt: st.Statement, env: ChainMap) -> None:
        if isinstance(stmt, st.Declaration):
            value = UNDEFINED if stmt.initializer is None else self.eval_expression(stmt.initializer, env)
            env[stmt.name.name] = value

        elif isinstance(stmt, st.Print):
            self._emit(format_value(self.eval_expression(stmt.argument, env)))

        elif isinstance(stmt, st.IfStatement):
            # Each block gets a fresh scope, its declarations die with it
            if truthy(self.eval_expression(stmt.condition, env)):
                self.exec_block(stmt.body, env.new_child())

        else:
            raise ExecutionError(f"Unknown statement type {type(stmt).__name__}.", getattr(stmt, "loc", None))

    def eval_expression(self, expr: st.Expression, env: ChainMap) -> Value:
        if isinstance(expr, st.Literal):
            return expr.value

        elif isinstance(expr, st.Identifier):
            if expr.name not in env:
                raise ExecutionError(f"{expr.name} is not defined.", expr.loc)
            if env[expr.name] is UNINITIALISED:
                raise ExecutionError(f"Cannot access '{expr.name}' before initialization.", expr.loc)
            return env[expr.name]

        elif isinstance(expr, st.BinaryExpression):
            left = self.eval_expression(expr.left, env)
            right = self.eval_expression(expr.right, env)
            return apply_operator(expr, left, right)

        elif isinstance(expr, st.ConditionalExpression):
            if truthy(self.eval_expression(expr.test, env)):
                return self.eval_expression(expr.consequent, env)
            return self.eval_expression(expr.alternate, env)

        raise ExecutionError(f"Unknown expression type {type(expr).__name__}.", getattr(expr, "loc", None))

    def _emit(self, line: str) -> None:
        self._output.append(line)
        if self._sink is not None:
            self._sink(line)


def apply_operator(expr: st.BinaryExpression, left: Value, right: Value) -> Value:
    op = expr.operator

    if op == "==":
        return left == right
    if op == "!=":
        return left != right

    if left is UNDEFINED or right is UNDEFINED:
        raise ExecutionError(f"Cannot apply '{op}' to undefined.", expr.loc)

    if op in ARITHMETIC_OPERATORS:
        if op == "/" and right == 0:
            raise ExecutionError("Division by zero.", expr.loc)

        try:
            return arithmetic(op, left, right)
        except OverflowError:
            # Integers too big for a float, the host sees these as Infinity
            return arithmetic(op, to_float(left), to_float(right))

    if op == "<":
        return left < right
    if op == ">":
        return left > right
    if op == "<=":
        return left <= right
    if op == ">=":
        return left >= right

    raise ExecutionError(f"Unknown operator '{op}'.", expr.loc)


def arithmetic(op: str, left: Value, right: Value) -> Value:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    return left / right


def to_float(value: Value) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def truthy(value: Value) -> bool:
    # NaN is the only value not equal to itself, and it is false like 0
    return value is not UNDEFINED and value != 0 and value == value


def format_value(value: Value) -> str:
    # Follows how the generated JavaScript would print the same value
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
