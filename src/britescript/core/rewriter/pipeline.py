"""
Orchestration logic for executing sequential rewriter passes.

This module provides the ``RewriterPipeline``, which manages the sequential
execution of multiple ``RewriterPass`` instances over a shared Context, and
``default_pipeline`` declaring the standard pass order.
"""

from typing import List

from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.interface import RewriterPass
from britescript.core.rewriter.passes import ImplPass, LetPass, PipePass, StructPass, TraitPass
from britescript.core.syntax.nodes import Node


class RewriterPipeline:
  """
  Manages a sequence of rewriting passes and executes them in order.
  """

  def __init__(self, passes: List[RewriterPass]) -> None:
    """
    Initializes the pipeline with a list of passes.

    Args:
        passes: Sequenced list of passes to execute.
    """
    self.passes = passes

  @property
  def names(self) -> List[str]:
    return [p.name for p in self.passes]

  def run(self, nodes: List[Node], context: RewriterContext) -> List[Node]:
    """
    Executes all registered passes sequentially on the tree.

    Passes with no matching node in the tree are skipped.

    Args:
        nodes: The parsed syntax tree.
        context: The shared execution state.

    Returns:
        The fully transformed tree.
    """
    current = nodes
    for pass_instance in self.passes:
      if not pass_instance.detects(current):
        continue
      context.tracer.start_phase(f"{pass_instance.name} pass")
      current = pass_instance.transform(current, context)
      context.tracer.end_phase()

    return current


def default_pipeline() -> RewriterPipeline:
  """
  Builds the standard pass order.

  Declarations run before `let` and pipes so that the later passes see
  implementation bodies as ordinary nested code.

  Returns:
      RewriterPipeline: struct, trait, impl, let, pipe.
  """
  return RewriterPipeline([StructPass(), TraitPass(), ImplPass(), LetPass(), PipePass()])
