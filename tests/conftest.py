import pytest

from lispy.builtin.env_builtin import register
from lispy.evaluation.evaluator import evaluate
from lispy.interpreter import Interpreter
from lispy.reader.parser import parse
from lispy.reader.reader import read
from lispy.types.environment import Environment


@pytest.fixture(autouse=True)
def _no_configured_prelude(monkeypatch):
    # Tests build their own interpreters; never pick up a developer's prelude
    monkeypatch.delenv("LISPY_PRELUDE_PATH", raising=False)


@pytest.fixture
def env():
    """Fresh global environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter(prelude=None)


@pytest.fixture
def eval_source(env):
    """Evaluate every top-level expression of `source` in `env`; return the last result."""
    def _eval(source: str):
        root = parse(source)
        last = None
        for node in root.children:
            if node.tag == "regex":
                continue
            last = evaluate(env, read(node))
        return last
    return _eval
