"""
Interactive read-parse-print loop for the Letter language.

Each entry is read until its braces balance, parsed into a `Program`, and
printed either as JSON or as formatted Letter source. Parse errors are
reported and the loop continues with the next entry.

Commands:
    exit, quit      Leave the REPL.
    verbose-mode    Toggle printing of the token stream before each AST.
"""

import io
import json
import logging
import re
import traceback

from letter.emitters.source_emitter import SourceEmitter
from letter.letter_lexer import tokenize
from letter.letter_parser import Parser

logger = logging.getLogger(__name__)

line_comment = re.compile(r"//.*")


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_entry() -> str | None:
    """Reads lines until braces balance. Returns None on `exit`/`quit`.

    Braces inside `//` comments are not counted.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        code = line_comment.sub("", line)
        brace_count += code.count("{") - code.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def start_repl(fmt: str = "json", verbose: bool = False) -> None:
    print(f"Letter REPL [format={fmt}]. Type 'exit' or 'quit' to leave.")
    parser = Parser()
    emitter = SourceEmitter()

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Letter REPL.")
                return
            if not src or src.startswith("//"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            try:
                if verbose:
                    print(f"[tokens] >>> {tokenize(src)}")
                ast = parser.parse(src)
            except SyntaxError as e:
                logger.debug("rejected input %r", src)
                print(f"[error] >>> {e.msg}")
                continue

            if fmt == "source":
                print(emitter.emit(ast))
            else:
                print(json.dumps(ast.to_dict(), indent=2))

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Letter REPL.")
            break
        except Exception:
            print_traceback()
