#!/usr/bin/env python3
"""
Command-line host for Sprig.

Usage:
    python -m sprig run FILE [--strict] [--max-depth N] [--config FILE]
    python -m sprig check FILE
    python -m sprig tokens FILE
    python -m sprig ast FILE [--spans]

Examples:
    # Run a script, printing the value of its last statement
    python -m sprig run closures.sp --print-result

    # Treat arithmetic on non-numbers as an error
    python -m sprig run script.sp --strict

    # Dump the parsed tree as JSON
    python -m sprig ast script.sp
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional


def _read_source(path_str: str) -> Optional[str]:
    source_path = Path(path_str)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return None
    return source_path.read_text(encoding="utf-8")


def _load_config(args):
    """Config file first, then command-line overrides."""
    from .config import InterpreterConfig, load_config

    config = load_config(args.config) if args.config else InterpreterConfig()
    return config.override(
        max_depth=args.max_depth,
        max_nesting=args.max_nesting,
        strict_operands=True if args.strict else None,
    )


def cmd_check(args):
    """Lex and parse a file without running it."""
    from . import parse, SprigError

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        program = parse(source, filename=args.file)
    except SprigError as e:
        print(e.with_source(source.splitlines()), file=sys.stderr)
        return 1

    print(f"OK: {Path(args.file).name} - {len(program.body)} statement(s)")
    return 0


def cmd_tokens(args):
    """Print the token stream of a file, one token per line."""
    from . import tokenize, SprigError

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        tokens = tokenize(source, filename=args.file)
    except SprigError as e:
        print(e, file=sys.stderr)
        return 1

    for token in tokens:
        print(f"{token.span.start}\t{token.type.name}\t{token.value}")
    return 0


def cmd_ast(args):
    """Print the AST of a file as JSON."""
    from . import parse, dump, SprigError

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        program = parse(source, filename=args.file)
    except SprigError as e:
        print(e.with_source(source.splitlines()), file=sys.stderr)
        return 1

    print(json.dumps(dump(program, include_spans=args.spans), indent=2))
    return 0


def cmd_run(args):
    """Run a file in a fresh global environment."""
    from . import compile_and_run, render

    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        config = _load_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = compile_and_run(source, config=config, filename=args.file)

    if not result.success:
        if args.json_errors:
            print(json.dumps(result.diagnostic.to_json()), file=sys.stderr)
        else:
            print(result.error, file=sys.stderr)
        return 1

    if args.print_result:
        print(render(result.value))
    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog='python -m sprig',
        description='Sprig interpreter',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # check command
    check_parser = subparsers.add_parser('check', help='Check a file for syntax errors')
    check_parser.add_argument('file', help='Sprig source file')

    # tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Print the token stream')
    tokens_parser.add_argument('file', help='Sprig source file')

    # ast command
    ast_parser = subparsers.add_parser('ast', help='Print the syntax tree as JSON')
    ast_parser.add_argument('file', help='Sprig source file')
    ast_parser.add_argument('--spans', action='store_true',
                            help='Include source spans')

    # run command
    run_parser = subparsers.add_parser('run', help='Run a file')
    run_parser.add_argument('file', help='Sprig source file')
    run_parser.add_argument('-c', '--config', metavar='FILE',
                            help='YAML interpreter configuration')
    run_parser.add_argument('--strict', action='store_true',
                            help='Fail on arithmetic with non-number operands')
    run_parser.add_argument('--max-depth', type=int, metavar='N',
                            help='Maximum evaluation depth')
    run_parser.add_argument('--max-nesting', type=int, metavar='N',
                            help='Maximum parser nesting')
    run_parser.add_argument('--print-result', action='store_true',
                            help='Print the value of the last statement')
    run_parser.add_argument('--json-errors', action='store_true',
                            help='Report failures as JSON diagnostics')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    if args.action == 'check':
        return cmd_check(args)
    elif args.action == 'tokens':
        return cmd_tokens(args)
    elif args.action == 'ast':
        return cmd_ast(args)
    elif args.action == 'run':
        return cmd_run(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
