"""
Shared helpers for rewriter tests.
"""

import pytest

from britescript.config import CompilerOptions
from britescript.core.compile_result import SourceUnit
from britescript.core.rewriter.context import RewriterContext
from britescript.core.syntax.nodes import render
from britescript.core.syntax.parser import BritescriptParser


@pytest.fixture
def run_pass():
  """
  Returns a callable that parses code, applies the given passes in order and
  renders the result. The rewriter context is returned alongside the text.
  """

  def _run(code, *passes, identifier="test.bs"):
    context = RewriterContext(SourceUnit.from_identifier(identifier, code), CompilerOptions())
    nodes = BritescriptParser(code).parse()
    for p in passes:
      nodes = p.transform(nodes, context)
    return render(nodes), context

  return _run
