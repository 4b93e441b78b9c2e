"""
Lexical tables shared by the LETTER lexer and parser.

TOKEN_SPEC is an ordered list of (pattern, token type) pairs. The lexer tries
them in this order and the first pattern that matches at the cursor wins, so
keywords must come before the generic identifier rule and two-character
operators before their one-character prefixes. Rules whose type is None are
matched and discarded (whitespace and comments).
"""

import re

KEYWORDS: tuple[str, ...] = (
    "let",
    "if",
    "else",
    "true",
    "false",
    "null",
    "while",
    "do",
    "for",
    "def",
    "return",
    "class",
    "extends",
    "super",
    "new",
    "this",
)

DELIMITERS: tuple[str, ...] = (";", "{", "}", "(", ")", ",", ".", "[", "]")

_RAW_SPEC: list[tuple[str, str | None]] = [
    # Whitespace and comments
    (r"\s+", None),
    (r"//.*", None),
    (r"/\*[\s\S]*?\*/", None),
    # Delimiters
    *[(re.escape(d), d) for d in DELIMITERS],
    # Keywords
    *[(rf"\b{kw}\b", kw) for kw in KEYWORDS],
    # Numbers and identifiers
    (r"\d+", "NUMBER"),
    (r"\w+", "IDENTIFIER"),
    # Equality before assignment
    (r"[=!]=", "EQUALITY_OPERATOR"),
    # Assignment
    (r"=", "SIMPLE_ASSIGN"),
    (r"[*/+\-]=", "COMPLEX_ASSIGN"),
    # Math
    (r"[+\-]", "ADDITIVE_OPERATOR"),
    (r"[*/]", "MULTIPLICATIVE_OPERATOR"),
    # Relational
    (r"[><]=?", "RELATIONAL_OPERATOR"),
    # Logical
    (r"&&", "LOGICAL_AND"),
    (r"\|\|", "LOGICAL_OR"),
    (r"!", "LOGICAL_NOT"),
    # Strings
    (r'"[^"]*"', "STRING"),
    (r"'[^']*'", "STRING"),
]

TOKEN_SPEC: list[tuple[re.Pattern[str], str | None]] = [
    (re.compile(pattern), token_type) for pattern, token_type in _RAW_SPEC
]

BLOCK_COMMENT_START = "/*"
QUOTES: tuple[str, ...] = ('"', "'")

ASSIGNMENT_TOKENS: frozenset[str] = frozenset({"SIMPLE_ASSIGN", "COMPLEX_ASSIGN"})
LITERAL_TOKENS: frozenset[str] = frozenset(
    {"NUMBER", "STRING", "true", "false", "null"}
)
UNARY_TOKENS: frozenset[str] = frozenset({"ADDITIVE_OPERATOR", "LOGICAL_NOT"})

EOF = "EOF"
