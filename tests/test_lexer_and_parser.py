import pytest
from hypothesis import given, strategies as st

from lispy.errors import ErrorKind, LispyReaderError, LispySyntaxError
from lispy.reader.parser import ParseNode, lex, parse
from lispy.reader.reader import read, read_number
from lispy.types.value import Error, Number, QExpr, SExpr, Symbol


def _kinds(source):
    return [(kind, text) for kind, text, _ in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("42", [("number", "42")]),
        ("-7", [("number", "-7")]),
        ("3.", [("number", "3.")]),
        ("-", [("symbol", "-")]),
        ("(+ 1 2)", [("lparen", "("), ("symbol", "+"), ("number", "1"), ("number", "2"), ("rparen", ")")]),
        ("{a b}", [("lbrace", "{"), ("symbol", "a"), ("symbol", "b"), ("rbrace", "}")]),
        ("% ^", [("symbol", "%"), ("symbol", "^")]),
        ("\\ & == <= !x", [("symbol", "\\"), ("symbol", "&"), ("symbol", "=="), ("symbol", "<="), ("symbol", "!x")]),
        ("; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("a ; trailing", [("symbol", "a")]),
        ("", []),
    ]
)
def test_lexer_basic(source, expected):
    assert _kinds(source) == expected


def test_numbers_win_over_symbols():
    # A digit run is a number even when symbol characters follow it
    assert _kinds("1a") == [("number", "1"), ("symbol", "a")]


def test_lexer_positions():
    assert [pos for _, _, pos in lex("(a  bc)")] == [0, 1, 4, 6]


@pytest.mark.parametrize("source", ["\"str\"", "a.b", "#t", "[1]"])
def test_lexer_rejects_unknown_characters(source):
    with pytest.raises(LispySyntaxError):
        list(lex(source))


def test_syntax_error_location():
    with pytest.raises(LispySyntaxError) as exc:
        list(lex("a\n  b #", filename="demo.lspy"))
    assert str(exc.value).startswith("demo.lspy:2:5: error:")
    assert exc.value.position == 6


def test_parse_tree_shape():
    root = parse("(+ 1 {x})")
    assert root.tag == "root"
    assert [c.tag for c in root.children] == ["regex", "sexpr", "regex"]
    sexpr = root.children[1]
    assert [c.tag for c in sexpr.children] == ["char", "symbol", "number", "qexpr", "char"]
    assert sexpr.children[0].text == "("
    assert sexpr.children[-1].text == ")"
    assert sexpr.children[3].children[1] == ParseNode("symbol", "x")


def test_parse_several_top_level_expressions():
    root = parse("1 x (y)")
    assert [c.tag for c in root.children] == ["regex", "number", "symbol", "sexpr", "regex"]


@pytest.mark.parametrize(
    "source,message",
    [
        ("(+ 1 2", "unmatched '('"),
        ("{1 (2}", "unexpected '}'"),
        (")", "unexpected ')'"),
        ("1 }", "unexpected '}'"),
    ]
)
def test_parse_errors(source, message):
    with pytest.raises(LispySyntaxError) as exc:
        parse(source)
    assert message in str(exc.value)


# -----------------------------------------------------
# Reader
# -----------------------------------------------------

def test_read_root_is_sexpr():
    value = read(parse("+ 1 {a (b)}"))
    assert value == SExpr([
        Symbol("+"),
        Number(1),
        QExpr([Symbol("a"), SExpr([Symbol("b")])]),
    ])


def test_read_empty_input():
    assert read(parse("")) == SExpr()


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0", 0.0),
        ("-12", -12.0),
        ("3.25", 3.25),
        ("7.", 7.0),
        ("1e3", 1000.0),
    ]
)
def test_read_number(text, expected):
    assert read_number(text) == Number(expected)


@pytest.mark.parametrize("text", ["1e999", "-1e999", "1e-999", "abc", "1..2", ""])
def test_read_number_rejects(text):
    result = read_number(text)
    assert isinstance(result, Error)
    assert result.kind is ErrorKind.STR_TO_NUM
    assert result.message == "This String cannot cast to number!"


def test_huge_literal_evaluates_to_error(eval_source):
    digits = "9" * 400
    result = eval_source(f"(+ 1 {digits})")
    assert result.kind is ErrorKind.STR_TO_NUM


def test_read_accepts_composite_tags():
    node = ParseNode("expr|sexpr|>", children=[
        ParseNode("char", "("),
        ParseNode("expr|symbol|regex", "+"),
        ParseNode("expr|number|regex", "1"),
        ParseNode("char", ")"),
    ])
    assert read(node) == SExpr([Symbol("+"), Number(1)])


def test_read_accepts_bare_root_marker():
    node = ParseNode(">", children=[
        ParseNode("regex"),
        ParseNode("number", "5"),
        ParseNode("regex"),
    ])
    assert read(node) == SExpr([Number(5)])


def test_read_unknown_tag():
    with pytest.raises(LispyReaderError):
        read(ParseNode("string", "\"x\""))


@given(st.lists(st.sampled_from(["(", ")", "{", "}", "a", "1", "-", " ", "+", ";", "\n"]), max_size=30))
def test_parse_and_read_never_crash(parts):
    source = "".join(parts)
    try:
        root = parse(source)
    except LispySyntaxError:
        return
    assert isinstance(read(root), SExpr)
