"""
Lexical analyzer for the LETTER programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction over the source with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Lazily pulls tokens from a CharacterStream, one per call.
    ScanError: Raised when the source cannot be tokenized.

Features:
    - Skips whitespace, `//` line comments and `/* */` block comments
    - Ordered rule table: the first rule that matches at the cursor wins
    - Recognizes:
        * Keywords (whole words only) before generic identifiers
        * Integer literals
        * Single- and double-quoted strings (quotes kept, no escapes)
        * Operators and punctuation

Raises:
    ScanError: On an unexpected character, an unterminated string or an
        unterminated block comment.

Example:
    >>> lexer = Lexer()
    >>> lexer.init("let x = 42;")
    >>> lexer.next_token()
    Token(let, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - ScanError
    - tokenize
"""

import re
from typing import Any

from letter.letter_constants import (
    BLOCK_COMMENT_START,
    EOF,
    QUOTES,
    TOKEN_SPEC,
)


class ScanError(SyntaxError):
    """Raised when the lexer cannot produce a token at the cursor.

    Attributes:
        char (str): The offending character.
        position (int): 0-based offset of the character in the source.
        line (int): 1-based line number.
        col (int): 1-based column number.
    """

    def __init__(self, message: str, char: str, position: int, line: int, col: int):
        super().__init__(message)
        self.char = char
        self.position = position
        self.line = line
        self.col = col


class CharacterStream:
    """
    Read-only view of a source string with a movable cursor.

    The stream tracks the cursor as an offset and as a line/column pair so the
    lexer can stamp tokens and errors with their location.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def match(self, pattern: re.Pattern[str]) -> str | None:
        """Matches `pattern` at the cursor without advancing.

        Args:
            pattern (re.Pattern[str]): Compiled rule pattern.

        Returns:
            str | None: The matched text, or None when the pattern does not
            match a non-empty prefix at the cursor.
        """
        m = pattern.match(self.source, self.position)
        if m is None or not m.group(0):
            return None
        return m.group(0)

    def advance(self, count: int) -> str:
        """Consumes `count` characters and returns them.

        Raises:
            Exception: If reading past the end of the source.
        """
        end = self.position + count
        if end > len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        text = self.source[self.position : end]
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)
        self.position = end
        return text

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` from the cursor, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def startswith(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.position)

    def end_of_file(self) -> bool:
        """Checks if the stream has consumed all characters."""
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the LETTER language.

    Attributes:
        type (str): The token type (e.g. 'IDENTIFIER', 'NUMBER', ';', 'let', 'EOF').
        value (str): The exact source text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
        offset (int): The 0-based offset where the token starts.
    """

    def __init__(
        self, type_: str, value: str, line: int = 0, col: int = 0, offset: int = 0
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col
        self.offset = offset

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.offset == other.offset
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col, self.offset))


class Lexer:
    """Lexical analyzer for the LETTER language.

    The lexer holds the source and a cursor and produces exactly one token per
    `next_token()` call. Whitespace and comments never produce tokens. Once the
    input is exhausted every further call returns the EOF token.

    Attributes:
        stream (CharacterStream): The source stream being tokenized.
    """

    def __init__(self, stream: CharacterStream | None = None) -> None:
        self.stream = stream if stream is not None else CharacterStream("")

    def init(self, source: str) -> None:
        """Resets the lexer to the start of `source`."""
        self.stream = CharacterStream(source)

    def is_eof(self) -> bool:
        return self.stream.end_of_file()

    def has_more_tokens(self) -> bool:
        return not self.stream.end_of_file()

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or the EOF token at end of input.

        Raises:
            ScanError: If no rule matches at the cursor, or a string or block
            comment is left unterminated.
        """
        while self.has_more_tokens():
            line, col, offset = self.stream.line, self.stream.column, self.stream.position
            self._check_unterminated()

            for pattern, token_type in TOKEN_SPEC:
                value = self.stream.match(pattern)
                if value is None:
                    continue
                self.stream.advance(len(value))
                if token_type is None:
                    break  # skipped, scan again from the new cursor
                return Token(token_type, value, line, col, offset)
            else:
                ch = self.stream.peek()
                raise ScanError(
                    f'Unexpected character: "{ch}" at offset {offset} (line {line}, col {col})',
                    ch,
                    offset,
                    line,
                    col,
                )

        return Token(EOF, EOF, self.stream.line, self.stream.column, self.stream.position)

    def _check_unterminated(self) -> None:
        """Rejects a string or block comment that runs into the end of input."""
        stream = self.stream
        ch = stream.peek()
        if ch in QUOTES and stream.source.find(ch, stream.position + 1) == -1:
            raise ScanError(
                f"Unterminated string at offset {stream.position} (line {stream.line}, col {stream.column})",
                ch,
                stream.position,
                stream.line,
                stream.column,
            )
        if (
            stream.startswith(BLOCK_COMMENT_START)
            and stream.source.find("*/", stream.position + 2) == -1
        ):
            raise ScanError(
                f"Unterminated block comment at offset {stream.position} (line {stream.line}, col {stream.column})",
                BLOCK_COMMENT_START,
                stream.position,
                stream.line,
                stream.column,
            )


def tokenize(source: str) -> list[Token]:
    """Returns every token of `source`, excluding the trailing EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        if tok.type == EOF:
            break
        tokens.append(tok)
    return tokens


__all__ = ["CharacterStream", "Lexer", "ScanError", "Token", "tokenize"]
