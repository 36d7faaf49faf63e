"""CLI entry point for the Kwento interpreter.

Usage:
    python -m kwento [-v|-vv|-vvv|-vvvv] [program_file]
    python -m kwento [-v...] --tokens <program_file>
    python -m kwento [-v...] --print-ast <program_file>
    python -m kwento [-v...] --emit-ast <program_file>
    python -m kwento [-v...] --ast <ast_json_file>
    python -m kwento [-v...] --config <game_file> [-o OUTPUT_DIR]

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the token stream of a program
  --print-ast   Print each statement of a program as an s-expression
  --emit-ast    Parse the given program and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --config      Compile a game-configuration file to JSON

Without a program file an interactive REPL is started. A program file whose
first word is GAME is compiled as a game-configuration file.

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status: 0 on success, 1 when a file is missing, 65 when the source has
compile errors (nothing is executed), 70 when a runtime error stops the
program.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .dsl import ConfigError, is_config_source, write_config
from .errors import Diagnostics
from .interpreter import Interpreter
from .lexer import scan
from .parser import parse_program
from .printer import AstPrinter
from .repl import Repl

logger = logging.getLogger('kwento')

EXIT_OK = 0
EXIT_NO_FILE = 1
EXIT_COMPILE_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def configure_logging(verbosity: int):
    if verbosity <= 0:
        return
    handler = logging.FileHandler('debug.txt', mode='w', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EXIT_NO_FILE)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    diagnostics = Diagnostics()
    statements = parse_program(source, diagnostics)
    if diagnostics.had_error:
        sys.exit(EXIT_COMPILE_ERROR)
    return statements


def compile_config_file(path: Path, source: str, output_dir) -> None:
    try:
        out_path = write_config(source, path, output_dir)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_COMPILE_ERROR)
    print(str(out_path))


def run_statements(interpreter: Interpreter, statements) -> None:
    if not interpreter.interpret(statements):
        sys.exit(EXIT_RUNTIME_ERROR)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='kwento', description="Kwento language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='KWENTO_FILE', help='print the token stream of a program')
    group.add_argument('--print-ast', metavar='KWENTO_FILE', help='print the statements of a program as s-expressions')
    group.add_argument('--emit-ast', metavar='KWENTO_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--config', metavar='GAME_FILE', help='compile a game-configuration file to JSON')
    parser.add_argument('-o', '--output-dir', metavar='DIR', help='directory for compiled configuration JSON')
    parser.add_argument('program', nargs='?', help='Kwento program file to execute; starts the REPL if omitted')
    args = parser.parse_args(argv)

    configure_logging(args.v)

    if args.tokens:
        diagnostics = Diagnostics()
        for token in scan(read_source(Path(args.tokens)), diagnostics):
            print(repr(token))
        if diagnostics.had_error:
            sys.exit(EXIT_COMPILE_ERROR)
        return

    if args.print_ast:
        statements = parse_or_exit(read_source(Path(args.print_ast)))
        printer = AstPrinter()
        for stmt in statements:
            print(printer.print(stmt))
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        statements = parse_or_exit(read_source(program_file))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(EXIT_NO_FILE)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        run_statements(Interpreter(debug_level=args.v), program_from_obj(data))
        return

    if args.config:
        config_file = Path(args.config)
        compile_config_file(config_file, read_source(config_file), args.output_dir)
        return

    if not args.program:
        Repl(Interpreter(debug_level=args.v)).run()
        return

    program_file = Path(args.program)
    source = read_source(program_file)
    if is_config_source(source):
        compile_config_file(program_file, source, args.output_dir)
        return
    interpreter = Interpreter(debug_level=args.v)
    run_statements(interpreter, parse_or_exit(source))


if __name__ == '__main__':
    main()
