import pytest
from hypothesis import given
from hypothesis import strategies as st

from letter.letter_constants import KEYWORDS
from letter.letter_lexer import CharacterStream, Lexer, ScanError, Token, tokenize


def types_of(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_delimiter_tokens() -> None:
    assert types_of("; { } ( ) , . [ ]") == [";", "{", "}", "(", ")", ",", ".", "[", "]"]


@pytest.mark.parametrize("keyword", KEYWORDS)  # type: ignore[misc]
def test_keywords_have_their_own_type(keyword: str) -> None:
    (tok,) = tokenize(keyword)
    assert tok.type == keyword
    assert tok.value == keyword


@pytest.mark.parametrize("word", ["letter", "iffy", "done", "classy", "_this", "new2"])  # type: ignore[misc]
def test_keyword_prefixes_are_identifiers(word: str) -> None:
    (tok,) = tokenize(word)
    assert tok.type == "IDENTIFIER"
    assert tok.value == word


def test_number_token() -> None:
    (tok,) = tokenize("123")
    assert tok.type == "NUMBER"
    assert tok.value == "123"


def test_number_then_identifier() -> None:
    assert [(t.type, t.value) for t in tokenize("12ab")] == [
        ("NUMBER", "12"),
        ("IDENTIFIER", "ab"),
    ]


def test_string_tokens_keep_quotes() -> None:
    double, single = tokenize("\"hello world\" 'it'")
    assert (double.type, double.value) == ("STRING", '"hello world"')
    assert (single.type, single.value) == ("STRING", "'it'")


def test_string_has_no_escape_processing() -> None:
    (tok,) = tokenize('"line\\nbreak"')
    assert tok.value == '"line\\nbreak"'


def test_other_quote_inside_string() -> None:
    (tok,) = tokenize("\"it's\"")
    assert tok.value == "\"it's\""


@pytest.mark.parametrize(  # type: ignore[misc]
    "source,expected",
    [
        ("==", "EQUALITY_OPERATOR"),
        ("!=", "EQUALITY_OPERATOR"),
        ("=", "SIMPLE_ASSIGN"),
        ("+=", "COMPLEX_ASSIGN"),
        ("-=", "COMPLEX_ASSIGN"),
        ("*=", "COMPLEX_ASSIGN"),
        ("/=", "COMPLEX_ASSIGN"),
        ("+", "ADDITIVE_OPERATOR"),
        ("-", "ADDITIVE_OPERATOR"),
        ("*", "MULTIPLICATIVE_OPERATOR"),
        ("/", "MULTIPLICATIVE_OPERATOR"),
        (">", "RELATIONAL_OPERATOR"),
        (">=", "RELATIONAL_OPERATOR"),
        ("<", "RELATIONAL_OPERATOR"),
        ("<=", "RELATIONAL_OPERATOR"),
        ("&&", "LOGICAL_AND"),
        ("||", "LOGICAL_OR"),
        ("!", "LOGICAL_NOT"),
    ],
)
def test_operator_tokens(source: str, expected: str) -> None:
    (tok,) = tokenize(source)
    assert tok.type == expected
    assert tok.value == source


def test_equality_is_preferred_over_assignment() -> None:
    assert types_of("a == b = c") == [
        "IDENTIFIER",
        "EQUALITY_OPERATOR",
        "IDENTIFIER",
        "SIMPLE_ASSIGN",
        "IDENTIFIER",
    ]


def test_not_followed_by_identifier() -> None:
    assert types_of("!x != y") == [
        "LOGICAL_NOT",
        "IDENTIFIER",
        "EQUALITY_OPERATOR",
        "IDENTIFIER",
    ]


def test_skip_whitespace_and_comments() -> None:
    source = """
    // a line comment
    /*
     * a block comment
     */
    42 // trailing
    """
    tokens = tokenize(source)
    assert [(t.type, t.value) for t in tokens] == [("NUMBER", "42")]


def test_division_is_not_a_comment() -> None:
    assert types_of("a / b") == ["IDENTIFIER", "MULTIPLICATIVE_OPERATOR", "IDENTIFIER"]


def test_whitespace_only_source_yields_eof() -> None:
    lexer = Lexer()
    lexer.init("   \n\t /* c */ // c")
    tok = lexer.next_token()
    assert tok.type == "EOF"
    assert tok.value == "EOF"


def test_eof_is_idempotent() -> None:
    lexer = Lexer()
    lexer.init("x")
    assert lexer.next_token().type == "IDENTIFIER"
    assert lexer.is_eof()
    assert not lexer.has_more_tokens()
    for _ in range(3):
        assert lexer.next_token().type == "EOF"


def test_init_resets_the_lexer() -> None:
    lexer = Lexer()
    lexer.init("a b")
    assert lexer.next_token().value == "a"
    lexer.init("c")
    assert lexer.next_token().value == "c"
    assert lexer.next_token().type == "EOF"


def test_line_column_and_offset_tracking() -> None:
    tokens = tokenize("let x = 1;\n  y = 2;")
    y = tokens[5]
    assert y.value == "y"
    assert (y.line, y.col, y.offset) == (2, 3, 13)
    assert (tokens[0].line, tokens[0].col, tokens[0].offset) == (1, 1, 0)


def test_line_tracking_through_block_comment() -> None:
    tokens = tokenize("/* a\nb\n*/ z")
    assert (tokens[0].line, tokens[0].col) == (3, 4)


def test_unexpected_character_raises() -> None:
    with pytest.raises(ScanError, match=r'Unexpected character: "@" at offset 4') as excinfo:
        tokenize("a = @b;")
    err = excinfo.value
    assert err.char == "@"
    assert err.position == 4
    assert (err.line, err.col) == (1, 5)


@pytest.mark.parametrize("source", ["&", "|", "#", "~", "a & b"])  # type: ignore[misc]
def test_lone_operator_characters_raise(source: str) -> None:
    with pytest.raises(ScanError, match="Unexpected character"):
        tokenize(source)


@pytest.mark.parametrize("source", ['"abc', "'abc", 'x = "abc;', "'"])  # type: ignore[misc]
def test_unterminated_string_raises(source: str) -> None:
    with pytest.raises(ScanError, match="Unterminated string"):
        tokenize(source)


def test_unterminated_block_comment_raises() -> None:
    with pytest.raises(ScanError, match="Unterminated block comment at offset 2"):
        tokenize("1 /* never closed")


def test_scan_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        tokenize("$")


def test_token_repr_and_eq() -> None:
    t1 = Token("NUMBER", "42", 1, 2, 1)
    t2 = Token("NUMBER", "42", 1, 2, 1)
    t3 = Token("IDENTIFIER", "x")

    assert repr(t1) == "Token(NUMBER, 42)"
    assert t1 == t2
    assert t1 != t3
    assert t1 != "Token(NUMBER, 42)"
    assert len({t1, t2, t3}) == 2


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab\ncd")
    assert stream.peek() == "a"
    assert stream.advance(3) == "ab\n"
    assert (stream.line, stream.column) == (2, 1)
    assert stream.startswith("cd")
    stream.advance(2)
    assert stream.end_of_file()
    assert stream.peek() == ""


def test_character_stream_advance_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(
        Exception, match="CharacterStreamError: Attempted to read past end of source"
    ):
        stream.advance(1)


@given(st.text(max_size=100))  # type: ignore[misc]
def test_lexer_does_not_crash_on_random_input(input_str: str) -> None:
    lexer = Lexer()
    lexer.init(input_str)
    try:
        while lexer.next_token().type != "EOF":
            pass
    except ScanError as e:
        assert "Unexpected character" in str(e) or "Unterminated" in str(e)


@given(st.lists(st.sampled_from(["x", "42", "+", "==", ";", "let", '"s"', "(", ")"]), max_size=20))  # type: ignore[misc]
def test_token_values_reconstruct_the_source(pieces: list[str]) -> None:
    source = " ".join(pieces)
    tokens = tokenize(source)
    assert [t.value for t in tokens] == pieces
    assert all(source[t.offset : t.offset + len(t.value)] == t.value for t in tokens)
