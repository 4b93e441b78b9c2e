import io
import json
import traceback

from letter.emitters.source_emitter import to_source
from letter.letter_cli import format_tokens
from letter.letter_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_program() -> str | None:
    """Read one program, continuing while braces are unbalanced.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def start_repl(pretty: bool = False, verbose: bool = False) -> None:
    print("Letter REPL. Type 'exit' or 'quit' to leave.")
    parser = Parser()

    while True:
        try:
            src = read_program()
            if src is None:
                print("Exiting Letter REPL.")
                return
            if not src or src.startswith("//"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if src.lower() == "pretty-mode":
                pretty = not pretty
                print(f"[mode] >>> Pretty mode {'ON' if pretty else 'OFF'}")
                continue

            try:
                if verbose:
                    print("[tokens] >>>")
                    print(format_tokens(src))
                ast = parser.parse(src)
            except SyntaxError as e:
                print("[error] >>>")
                print(e)
                continue

            if pretty:
                print(to_source(ast))
            else:
                print(json.dumps(ast.to_dict(), indent=2))

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Letter REPL.")
            break
        except Exception:
            print_traceback()


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
