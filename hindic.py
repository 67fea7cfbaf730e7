from __future__ import annotations

from dataclasses import fields, is_dataclass
import json
import logging
import sys

import argparse

from hindi.codegen import generate
from hindi.errors import CompilerError
from hindi.interpreter import Executor, Interpreter
from hindi.lexer import Token, tokenize
from hindi.parser import parse
import hindi.st as st


logger = logging.getLogger("hindi")

LOG_FORMAT = "%(asctime)s | %(levelname)8s | %(name)18.18s | %(message)s"


# ---------------------------------------------------------------------------------------------------------------------
# CLI Implementation
#

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compiler for the Hindi scripting language.")

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "-c", "--compile",
        action="store_true",
        help="Compile the file to JavaScript")
    group.add_argument(
        "-i", "--interpret",
        action="store_true",
        help="Interpret the file")

    parser.add_argument(
        "-o", "--output",
        help="Where to write the compiled code (defaults to stdout)")
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Log the tokens, syntax tree and generated code")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every compiler stage")

    parser.add_argument("filename", help="The path to the source file")

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose or args.debug else logging.WARNING
    logging.basicConfig(format=LOG_FORMAT, level=level)

    try:
        source = read_source(args.filename)
        if args.compile:
            do_compile(source, args.filename, args.output, args.debug)
        else:
            do_interpret(source, args.filename, args.debug)

    except CompilerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except OSError as e:
        print(f"Error: {e.strerror}: {e.filename}", file=sys.stderr)
        return 1

    return 0


def read_source(path: str) -> str:
    with open(path, "r") as source_file:
        return source_file.read()


def do_compile(source: str, file_name: str, output: str | None, debug: bool) -> None:
    code = compile_source(source, file_name, debug)

    if output is None:
        print(code)
        return

    with open(output, "w") as out:
        out.write(code + "\n")


def do_interpret(source: str, file_name: str, debug: bool) -> None:
    run_source(source, file_name, debug, Interpreter(sink=print))


# ---------------------------------------------------------------------------------------------------------------------
# Pipeline
#

def frontend(source: str, file_name: str = "<input>", debug: bool = False) -> st.Program:
    tokens = tokenize(source, file_name)
    if debug:
        dump_tokens(tokens)

    program = parse(tokens)
    if debug:
        dump_ast(program)

    return program


def compile_source(source: str, file_name: str = "<input>", debug: bool = False) -> str:
    """Compiles Hindi source text to JavaScript. Any error aborts the whole compile."""
    program = frontend(source, file_name, debug)

    code = generate(program)
    if debug:
        logger.debug("Generated code:\n%s", code)

    return code


def run_source(source: str, file_name: str = "<input>", debug: bool = False,
               executor: Executor | None = None) -> str:
    """Compiles and runs Hindi source text, returning the captured output."""
    program = frontend(source, file_name, debug)

    # Generating code still validates the tree, even though the
    # interpreter works on the tree itself
    code = generate(program)
    if debug:
        logger.debug("Generated code:\n%s", code)

    lines = (executor or Interpreter()).execute(program)
    return "\n".join(lines)


# ---------------------------------------------------------------------------------------------------------------------
# Debug Helpers
#

def dump_tokens(tokens: list[Token]) -> None:
    logger.debug("Tokens:\n%s", "\n".join(
        f"  [{i:04}]    {tk.typ.name:10} {tk.lexeme}" for i, tk in enumerate(tokens)))


def dump_ast(program: st.Program) -> None:
    logger.debug("AST:\n%s", json.dumps(ast_to_dict(program), indent=2))


def ast_to_dict(node: object) -> object:
    if isinstance(node, list):
        return [ast_to_dict(child) for child in node]

    if is_dataclass(node):
        return {"type": type(node).__name__, **{
            f.name: ast_to_dict(getattr(node, f.name))
            for f in fields(node)
            if f.name != "loc"}}

    return node


# ---------------------------------------------------------------------------------------------------------------------
# Entry Point
#

if __name__ == "__main__":
    sys.exit(main())
