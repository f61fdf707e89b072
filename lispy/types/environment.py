"""Runtime environment for Lispy.

An Environment is one frame of bindings from symbol names to Values plus a
non-owning `outer` link to the enclosing frame. The root frame (no outer) is
the global environment the builtins live in.

Bindings are copied on the way in and on the way out, so a value handed to or
obtained from an Environment is never aliased with the stored one.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterator, Optional

from lispy import BuiltinFn
from lispy.errors import ErrorKind
from lispy.types.value import Builtin, Error, Symbol, Value

logger = logging.getLogger(__name__)


class Environment:
    """Chained mapping from symbol names to owned Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        # Insertion ordered; replacing a binding keeps its position
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def get(self, name: str) -> Value:
        """Look up `name` through the frame chain.

        Returns a copy of the bound value, or an Error value when no frame
        binds the name.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env.vars[name].copy()
            env = env.outer
        logger.debug("unbound symbol %r", name)
        return Error.of(ErrorKind.UNBOUND_SYMBOL, name=name)

    def put(self, name: str, value: Value) -> None:
        """Bind `name` in this frame only, replacing any existing binding."""
        self.vars[name] = value.copy()

    def define_global(self, name: str, value: Value) -> None:
        """Bind `name` in the outermost frame of the chain."""
        self.root().put(name, value)

    def lookup_by_builtin(self, fn: BuiltinFn) -> Value:
        """Recover the symbol a native function is bound under.

        Returns a Symbol carrying the name, or an Error value when the
        function is not bound anywhere in the chain.
        """
        env: Optional[Environment] = self
        while env is not None:
            for key, value in env.vars.items():
                if isinstance(value, Builtin) and value.fn is fn:
                    return Symbol(key)
            env = env.outer
        return Error.of(ErrorKind.NO_SUCH_FUNCTION)

    def copy(self) -> Environment:
        """Deep-copy the local bindings; the outer link is shared, not copied."""
        env = Environment(self.outer)
        env.vars = {k: v.copy() for k, v in self.vars.items()}
        return env

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-bind a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.put(k, v)

    def clear(self) -> None:
        self.vars.clear()

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __iter__(self) -> Iterator[tuple[str, Value]]:
        return iter(self.vars.items())

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
