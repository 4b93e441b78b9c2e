"""
LETTER CLI Entrypoint.

This module provides the command-line interface for parsing LETTER source code.

Features:
    - Read source from `.letter` files or inline strings.
    - Print the AST as JSON (default), the token stream, or normalized source.
    - Output to console or file.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    letter hello.letter
    letter -s "let y = x + 5 > 10;"
    letter -s "a = b = c;" --pretty
    letter myfile.letter -o myfile.json --indent 4
    letter --repl --verbose

Functions:
    run_letter(source: str, is_string: bool = False, tokens: bool = False, pretty: bool = False,
               out: Optional[str] = None, indent: int = 2) -> None:
        Executes the LETTER pipeline (lex → parse → output).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from letter.emitters.source_emitter import to_source
from letter.letter_lexer import tokenize
from letter.letter_parser import Parser


def format_tokens(source: str) -> str:
    return "\n".join(
        f"{tok.line}:{tok.col}\t{tok.type}\t{tok.value}" for tok in tokenize(source)
    )


def run_letter(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    pretty: bool = False,
    out: str | None = None,
    indent: int = 2,
) -> None:
    """
    Run the LETTER toolchain: lex, parse, and print or write the result.

    Args:
        source (str): The LETTER source code or path to a `.letter` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, output the token stream instead of the AST.
        pretty (bool): If True, output normalized source printed from the AST.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        indent (int): JSON indentation for the AST output. Defaults to 2.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.letter'.
        ScanError: If the source cannot be tokenized.
        SyntaxError: If the source does not parse.
    """
    if not is_string and not source.endswith(".letter"):
        raise ValueError("Only .letter files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lex only, or lex and parse
    if tokens:
        output = format_tokens(source)
    else:
        ast = Parser().parse(source)
        if pretty:
            output = to_source(ast)
        else:
            output = json.dumps(ast.to_dict(), indent=indent)

    # 3. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
    else:
        print(output)


def main() -> None:
    """
    Entry point for the LETTER CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified;
    otherwise parses the given source and prints the result. Scan and syntax
    errors are reported on stderr and exit with status 1.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from letter.letter_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="letter")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-k", "--tokens", action="store_true", help="Print the token stream"
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Print normalized source"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-i",
        "--indent",
        type=int,
        default=2,
        help="JSON indentation for the AST (default: 2)",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from letter.letter_repl import start_repl

        start_repl(pretty=args.pretty, verbose=args.verbose)
        return

    try:
        run_letter(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            pretty=args.pretty,
            out=args.out,
            indent=args.indent,
        )
    except SyntaxError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
