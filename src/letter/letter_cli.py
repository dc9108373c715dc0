"""
Letter CLI Entrypoint.

This module provides the command-line interface for the Letter parser.
It parses Letter source and prints the resulting AST, or re-emits the program
as normalized source.

Features:
    - Read source from `.letter` files or inline strings.
    - Tokenize and parse into a Letter AST.
    - Render the AST as JSON (`--format json`) or as formatted Letter source
      (`--format source`).
    - Output to console or file.
    - Launch an interactive REPL.

Example usage:
    letter hello.letter
    letter -s "let x = 1 + 2;"
    letter myfile.letter -f source -o formatted.letter
    letter --repl --verbose

Configuration:
    LETTER_LOG_LEVEL: default logging level when `--log-level` is not given.

Functions:
    run_letter(source: str, is_string: bool = False, fmt: str = "json", out: Optional[str] = None,
               indent: int = 2) -> str:
        Executes the Letter pipeline (parse → render → output).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import logging
import os
import sys

from letter.emitters.source_emitter import SourceEmitter
from letter.letter_ast import Program
from letter.letter_parser import Parser

logger = logging.getLogger(__name__)

FORMATS = ("json", "source")


def render(ast: Program, fmt: str = "json", indent: int = 2) -> str:
    """Renders a parsed program in the requested output format.

    Raises:
        ValueError: If `fmt` is not a known format.
    """
    if fmt == "json":
        return json.dumps(ast.to_dict(), indent=indent)
    if fmt == "source":
        return SourceEmitter().emit(ast)
    raise ValueError(f"Unknown output format: {fmt}")


def run_letter(
    source: str,
    is_string: bool = False,
    fmt: str = "json",
    out: str | None = None,
    indent: int = 2,
) -> str:
    """
    Run the Letter toolchain: parse, render, and print or write the output.

    Args:
        source (str): The Letter source code or path to a `.letter` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        fmt (str): Output format ('json' or 'source'). Defaults to 'json'.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        indent (int): JSON indentation width. Defaults to 2.

    Returns:
        str: The rendered output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.letter'.
        SyntaxError: If the source cannot be tokenized or parsed.
    """
    if not is_string and not source.endswith(".letter"):
        raise ValueError("Only .letter files are supported.")
    # 1. Read source
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Parsing
    ast = Parser().parse(source)

    # 3. Rendering
    output = render(ast, fmt=fmt, indent=indent)

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        logger.info("wrote %s output to %s", fmt, out)
    else:
        print(output)
    return output


def configure_logging(level: str | None) -> None:
    name = (level or os.getenv("LETTER_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """
    Entry point for the Letter CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, parses the source and prints or writes the rendered AST.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Output format ('json' or 'source'), default is 'json'.
        - `-o`, `--out`: Write output to a file.
        - `--indent`: JSON indentation width.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Show the token stream in the REPL.
        - `--log-level`: Logging level (defaults to $LETTER_LOG_LEVEL or WARNING).

    Parse failures, unsupported file names and unreadable files are reported
    on stderr with exit status 1.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from letter.letter_repl import start_repl

        configure_logging(None)
        start_repl()
        return
    parser = argparse.ArgumentParser(prog="letter")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation width (default: 2)"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show tokens in the REPL (if --repl)"
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="Logging level (default: $LETTER_LOG_LEVEL or WARNING)",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.repl or args.source is None:
        from letter.letter_repl import start_repl

        start_repl(fmt=args.fmt, verbose=args.verbose)
        return

    try:
        run_letter(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            indent=args.indent,
        )
    except SyntaxError as e:
        print(f"error: {e.msg}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
