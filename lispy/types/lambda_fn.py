"""User-defined function values for Lispy."""

from __future__ import annotations

from io import StringIO

from lispy.types.environment import Environment
from lispy.types.value import QExpr, Value


class Lambda(Value):
    """A first-class lambda with formal parameters, body, and its own env.

    Formals are consumed from the front as arguments get bound, so a lambda
    that still holds formals after a call is a partial application.
    """

    __slots__ = ("formals", "body", "env")

    type_name = "Function"

    def __init__(
        self, formals: QExpr, body: QExpr, env: Environment | None = None
    ):
        super().__init__()
        self.formals: QExpr = formals
        self.body: QExpr = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        return Lambda(
            self.formals.copy(), self.body.copy(), self.env.copy()
        ).named(self.name)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
            and self.env.vars == other.env.vars
        )

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
