# Core type aliases for Lispy's data model.
# Every runtime datum is a subclass of lispy.types.value.Value (a closed
# variant: Number, Error, Symbol, Builtin, Lambda, SExpr, QExpr). The aliases
# below are kept loose so that signatures in the evaluator and builtin modules
# read the same way regardless of which concrete case flows through them.

from typing import Any, Callable

__version__ = "0.0.6"

# Native builtin signature: (Environment, SExpr of evaluated args) -> Value
BuiltinFn = Callable[[Any, Any], Any]

# Evaluator function type, passed down into the call protocol
EvaluatorFn = Callable[[Any, Any], Any]
