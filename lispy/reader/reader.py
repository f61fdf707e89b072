"""Convert parse trees into Lispy values.

The reader is the evaluator's input boundary: it accepts any tree of nodes
exposing `tag`, `text` and `children` (see lispy.reader.parser.ParseNode) and
builds the owned Value tree the evaluator reduces.
"""

from __future__ import annotations

import math
import re

from lispy.errors import ErrorKind, LispyReaderError
from lispy.types.value import Error, Expr, Number, QExpr, SExpr, Symbol, Value

NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

SKIPPED_TEXT = frozenset({"(", ")", "{", "}"})


def _tag_parts(tag: str) -> set[str]:
    # Accept composite tags such as "expr|number|regex"
    return set(tag.split("|"))


def read_number(text: str) -> Value:
    """Parse decimal text; out-of-range or malformed text becomes an Error value."""
    if not NUMBER_RE.fullmatch(text):
        return Error.of(ErrorKind.STR_TO_NUM)
    num = float(text)
    if math.isinf(num):
        return Error.of(ErrorKind.STR_TO_NUM)
    # Underflow: nonzero digits that collapsed to zero
    if num == 0 and any(c in "123456789" for c in text.split("e")[0].split("E")[0]):
        return Error.of(ErrorKind.STR_TO_NUM)
    return Number(num)


def read(node) -> Value:
    """Build a Value tree from a parse node.

    Roots and sexprs become S-Expressions, qexprs become Q-Expressions;
    bracket and regex-anchor leaves are skipped.
    """
    parts = _tag_parts(node.tag)
    if "number" in parts:
        return read_number(node.text)
    if "symbol" in parts:
        return Symbol(node.text)

    x: Expr
    if "root" in parts or node.tag == ">" or "sexpr" in parts:
        x = SExpr()
    elif "qexpr" in parts:
        x = QExpr()
    else:
        raise LispyReaderError(f"Cannot read parse node tagged {node.tag!r}")

    for child in node.children:
        if child.text in SKIPPED_TEXT or child.tag == "regex":
            continue
        x.add_tail(read(child))
    return x
