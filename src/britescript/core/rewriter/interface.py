"""
Interface definition for Rewriter Passes.

This module defines the abstract base class that all transformation passes
must implement to be compatible with the ``RewriterPipeline``, and
``NodeRewriterPass``, a convenience base that walks the syntax tree bottom-up
and lets subclasses replace individual nodes.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional, Type

from britescript.core.rewriter.context import RewriterContext
from britescript.core.syntax.nodes import (
  Group,
  ImplDecl,
  Node,
  PipeExpr,
  Sequence,
  StructDecl,
  TraitDecl,
  walk,
)
from britescript.enums import Construct


class RewriterPass(ABC):
  """
  Abstract contract for a transformation pass in the rewriting pipeline.

  Each pass targets a single construct kind and pairs its transformation with
  a predicate telling the pipeline whether the parsed tree holds any work.
  """

  construct: Construct

  @property
  def name(self) -> str:
    return self.construct.value

  def detects(self, nodes: List[Node]) -> bool:
    """
    Checks whether the tree holds anything this pass rewrites.

    Args:
        nodes: The current syntax tree (top-level nodes).

    Returns:
        bool: True if the pass has work to do. Passes that cannot tell
        always run.
    """
    return True

  @abstractmethod
  def transform(self, nodes: List[Node], context: RewriterContext) -> List[Node]:
    """
    Executes the transformation logic on the given node list.

    Args:
        nodes: The input syntax tree (top-level nodes).
        context: The shared rewriter context containing configuration and state.

    Returns:
        The transformed node list.
    """
    pass


class NodeRewriterPass(RewriterPass):
  """
  Base for passes that replace nodes of one kind.

  Children are rewritten before their parent so that a node handed to
  ``rewrite_node`` already carries rewritten descendants.
  """

  node_type: Type[Node]

  def detects(self, nodes: List[Node]) -> bool:
    return any(isinstance(node, self.node_type) for node in walk(nodes))

  def transform(self, nodes: List[Node], context: RewriterContext) -> List[Node]:
    return self._visit_list(nodes, context)

  @abstractmethod
  def rewrite_node(self, node: Node, context: RewriterContext) -> Optional[Node]:
    """
    Rewrites a single node.

    Args:
        node: The node, with rewritten children.
        context: The shared rewriter context.

    Returns:
        A replacement node, or None to keep the node unchanged.
    """
    pass

  def _visit_list(self, nodes: List[Node], context: RewriterContext) -> List[Node]:
    return [self._visit(node, context) for node in nodes]

  def _visit(self, node: Node, context: RewriterContext) -> Node:
    if isinstance(node, (Group, Sequence)):
      node = replace(node, children=self._visit_list(node.children, context))
    elif isinstance(node, (StructDecl, TraitDecl, ImplDecl)):
      node = replace(node, body=self._visit(node.body, context))
    elif isinstance(node, PipeExpr):
      stages = [
        replace(
          stage,
          callee=self._visit_list(stage.callee, context),
          args=self._visit(stage.args, context) if stage.args is not None else None,
        )
        for stage in node.stages
      ]
      node = replace(node, operand=self._visit_list(node.operand, context), stages=stages)

    rewritten = self.rewrite_node(node, context)
    return node if rewritten is None else rewritten
