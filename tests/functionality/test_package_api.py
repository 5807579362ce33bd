"""
Tests for the top-level package API.
"""

from unittest.mock import patch

import pytest

import britescript
from britescript import CompileResult, CompilerEngine, transpile


def test_transpile_let_and_pipe():
  assert transpile("let total = prices |> sum") == "const total = sum(prices)"


def test_transpile_passes_options():
  assert transpile("const a = <b>x</b>;", identifier="view.bsx", emit_source_map=False) == "const a = <b>x</b>;"


def test_transpile_raises_on_errors():
  with patch.object(CompilerEngine, "compile", return_value=CompileResult(errors=["boom"])):
    with pytest.raises(ValueError, match="boom"):
      transpile("let a = 1;")


def test_transpile_rejects_invalid_options():
  with pytest.raises(ValueError):
    transpile("let a = 1;", target="es3")


def test_exports():
  assert britescript.__version__
  for name in britescript.__all__:
    assert hasattr(britescript, name)
