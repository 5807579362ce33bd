"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Console isolation so log output of one test never leaks into another.
"""

import sys
import pytest
from pathlib import Path

# Add src to path so we can import 'britescript' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from britescript.utils.console import reset_console


@pytest.fixture(autouse=True)
def isolate_console():
  """
  Restores the default console after each test, so tests that capture logs
  through `set_console` do not affect their neighbours.
  """
  yield
  reset_console()


@pytest.fixture
def no_env(monkeypatch):
  """Removes environment variables that influence the development flag."""
  monkeypatch.delenv("BRITESCRIPT_ENV", raising=False)
  monkeypatch.delenv("NODE_ENV", raising=False)
