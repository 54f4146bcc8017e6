import pytest

from clove.builtin.env_builtin import register
from clove.interpreter import Interpreter
from clove.types.environment import Environment


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    # Sessions read their defaults from the environment; keep tests hermetic.
    for var in ("CLOVE_EVAL_TIMEOUT", "CLOVE_PRELUDE_PATH", "CLOVE_RECURSION_LIMIT", "CLOVE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def interp():
    """Fresh session with no prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def env():
    """Fresh global environment with builtins loaded."""
    e = Environment()
    register(e)
    return e
