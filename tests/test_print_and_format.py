import pytest

from lispy.builtin.env_builtin import add
from lispy.debug_utils.pprint import (
    COLOR_BUILTIN,
    COLOR_ERROR,
    COLOR_LAMBDA,
    COLOR_NUMBER,
    COLOR_SYMBOL,
    RESET,
    NO_COLOR_OPTIONS,
    colorize,
    format_env,
    to_str,
)
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.value import Builtin, Error, Number, QExpr, SExpr, Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", "3"),
        ("(/ 10 4)", "2.5"),
        ("(- 0 0.5)", "-0.5"),
        ("{1 (a b) {}}", "{1 (a b) {}}"),
        ("(list)", "<builtin>: list"),
        ("head", "<builtin>: head"),
        ("(/ 1 0)", "Error: Division by zero!"),
        ("(\\ {a b} {+ a b})", "(\\ {a b} {+ a b})"),
        ("()", "()"),
    ]
)
def test_to_str(eval_source, source, expected):
    assert to_str(eval_source(source)) == expected


def test_renamed_builtin_prints_binding_name(eval_source):
    eval_source("(def {first} head)")
    assert to_str(eval_source("first")) == "<builtin>: first"


@pytest.mark.parametrize(
    "value,color",
    [
        (Number(1), COLOR_NUMBER),
        (Symbol("a"), COLOR_SYMBOL),
        (Error("e"), COLOR_ERROR),
        (Builtin("+", add), COLOR_BUILTIN),
        (Lambda(QExpr(), QExpr()), COLOR_LAMBDA),
    ]
)
def test_colorize(value, color):
    assert colorize(value, "x") == f"{color}x{RESET}"
    assert colorize(value, "x", NO_COLOR_OPTIONS) == "x"


def test_lists_are_not_colored_but_their_items_are():
    value = QExpr([Number(1), SExpr()])
    assert to_str(value, color=True) == f"{{{COLOR_NUMBER}1{RESET} ()}}"


def test_colored_lambda_wraps_whole_text():
    fn = Lambda(QExpr([Symbol("x")]), QExpr([Symbol("x")]))
    text = to_str(fn, color=True)
    assert text.startswith(COLOR_LAMBDA + "(\\ {")
    assert text.endswith(RESET)


def test_format_env_table():
    env = Environment()
    env.put("x", Number(1))
    env.put("head", Builtin("head", add))
    lines = format_env(env).splitlines()
    assert lines[0] == "    <name>  --      <type>"
    assert lines[1] == "         x  --      Number"
    assert lines[2] == "      head  --    Function"
    assert lines[3] == "total: 2"


def test_format_env_empty():
    assert format_env(Environment()).splitlines()[-1] == "total: 0"


def test_format_env_colors_types():
    env = Environment()
    env.put("e", Error("bad"))
    assert f"{COLOR_ERROR}     Error{RESET}" in format_env(env, color=True)


def test_format_env_lists_only_the_given_frame(env):
    child = Environment(env)
    child.put("local", Number(3))
    assert format_env(child).splitlines()[-1] == "total: 1"
    assert format_env(env).splitlines()[-1] == f"total: {len(env)}"
