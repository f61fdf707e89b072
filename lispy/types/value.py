"""Value model for Lispy.

Every datum the evaluator touches is one case of a closed variant rooted at
`Value`: Number, Error, Symbol, Builtin, SExpr and QExpr live here, Lambda
lives in `lispy.types.lambda_fn` because it owns an Environment.

Values form trees. A list owns its cells outright, so anything that must
outlive its parent is moved (pop/take) or duplicated with `copy()`; nothing is
ever shared between two live trees.
"""

from __future__ import annotations

import math
import sys
from typing import ClassVar, Iterator, Optional

from lispy import BuiltinFn
from lispy.errors import ErrorKind, error_message


class Value:
    """Common base: every case carries an optional display name."""

    __slots__ = ("name",)

    type_name: ClassVar[str] = "Unknown"

    def __init__(self):
        # The symbol this value was last resolved through, for diagnostics only
        self.name: Optional[str] = None

    def named(self, name: Optional[str]) -> Value:
        self.name = name
        return self

    def copy(self) -> Value:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


def format_number(num: float) -> str:
    """Shortest round-trip decimal text, without a trailing '.0' on integers."""
    num = float(num)
    if math.isfinite(num) and num.is_integer() and abs(num) < 1e16:
        if num == 0 and math.copysign(1.0, num) < 0:
            return "-0"
        return str(int(num))
    return repr(num)


class Number(Value):
    __slots__ = ("num",)

    type_name = "Number"

    def __init__(self, num: float):
        super().__init__()
        self.num: float = float(num)

    def copy(self) -> Number:
        return Number(self.num).named(self.name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.num == other.num

    def __str__(self) -> str:
        return format_number(self.num)

    def __repr__(self) -> str:
        return f"Number({self.num!r})"


class Error(Value):
    __slots__ = ("message", "kind")

    type_name = "Error"

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__()
        self.message: str = message
        self.kind: ErrorKind | None = kind

    @classmethod
    def of(cls, kind: ErrorKind, **fields) -> Error:
        """Build an Error from a registered kind and its template fields."""
        return cls(error_message(kind, **fields), kind)

    def copy(self) -> Error:
        return Error(self.message, self.kind).named(self.name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __str__(self) -> str:
        return f"Error: {self.message}"

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


class Symbol(Value):
    __slots__ = ("id",)

    type_name = "Symbol"

    def __init__(self, name: str):
        super().__init__()
        # Intern to ensure fast equality and dictionary keys
        self.id: str = sys.intern(name)

    def copy(self) -> Symbol:
        return Symbol(self.id).named(self.name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"


class Builtin(Value):
    __slots__ = ("builtin_name", "fn")

    type_name = "Function"

    def __init__(self, builtin_name: str, fn: BuiltinFn):
        super().__init__()
        self.builtin_name: str = builtin_name
        self.fn: BuiltinFn = fn

    def copy(self) -> Builtin:
        return Builtin(self.builtin_name, self.fn).named(self.name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Builtin) and self.fn is other.fn

    def __str__(self) -> str:
        return f"<builtin>: {self.name or self.builtin_name}"

    def __repr__(self) -> str:
        return f"Builtin({self.builtin_name!r})"


class Expr(Value):
    """Shared behaviour of the two list cases."""

    __slots__ = ("cells",)

    open_char: ClassVar[str] = "("
    close_char: ClassVar[str] = ")"

    def __init__(self, cells: list[Value] | None = None):
        super().__init__()
        self.cells: list[Value] = list(cells) if cells else []

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Value:
        return self.cells[index]

    def add_tail(self, value: Value) -> Expr:
        self.cells.append(value)
        return self

    def add_head(self, value: Value) -> Expr:
        self.cells.insert(0, value)
        return self

    def pop(self, index: int = 0) -> Value:
        """Remove and return the cell at `index`; the caller now owns it."""
        return self.cells.pop(index)

    def take(self, index: int) -> Value:
        """Keep only the cell at `index`, discarding the rest of the list."""
        value = self.cells.pop(index)
        self.cells.clear()
        return value

    def join(self, other: Expr) -> Expr:
        """Move every cell of `other` onto the end of this list."""
        self.cells.extend(other.cells)
        other.cells.clear()
        return self

    def to_qexpr(self) -> QExpr:
        q = QExpr()
        q.cells, self.cells = self.cells, []
        return q

    def to_sexpr(self) -> SExpr:
        s = SExpr()
        s.cells, self.cells = self.cells, []
        return s

    def copy(self) -> Expr:
        return type(self)([c.copy() for c in self.cells]).named(self.name)

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.cells == other.cells

    def __str__(self) -> str:
        inner = " ".join(str(c) for c in self.cells)
        return f"{self.open_char}{inner}{self.close_char}"


class SExpr(Expr):
    __slots__ = ()

    type_name = "S-Expression"


class QExpr(Expr):
    __slots__ = ()

    type_name = "Q-Expression"
    open_char = "{"
    close_char = "}"
