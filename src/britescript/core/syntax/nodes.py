"""
Britescript Syntax Tree Nodes.

Defines the small tagged tree produced by the `BritescriptParser`. Every node
implements `__str__` to emit its source text; a tree that no pass has touched
renders back to the original input byte for byte.

Node kinds:
- `Leaf`: a single token (identifiers, punctuation, literals, markup, trivia).
- `Group`: a bracketed region `(...)`, `[...]`, `{...}` or a template substitution `${...}`.
- `StructDecl`, `TraitDecl`, `ImplDecl`: declaration constructs with a body.
- `LetBinding`: the `let` keyword of a binding.
- `PipeExpr`: an operand followed by one or more `|>` stages.
- `Verbatim` and `Sequence`: output produced by rewrite passes.
"""

import abc
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from britescript.core.syntax.tokens import Token, TokenKind


class Node(abc.ABC):
  """Abstract base class for all syntax tree nodes."""

  @abc.abstractmethod
  def __str__(self) -> str:
    """Returns the source representation of the node."""
    pass


def render(nodes: Iterable[Node]) -> str:
  """
  Concatenates the source text of a node list.

  Args:
      nodes: Nodes to render.

  Returns:
      str: The emitted text.
  """
  return "".join(str(n) for n in nodes)


@dataclass
class Leaf(Node):
  """A single token."""

  token: Token

  @property
  def kind(self) -> TokenKind:
    return self.token.kind

  @property
  def text(self) -> str:
    return self.token.text

  @property
  def is_trivia(self) -> bool:
    return self.token.is_trivia

  def __str__(self) -> str:
    return self.token.text


@dataclass
class Group(Node):
  """
  A bracketed region.

  Attributes:
      open: The opening bracket token.
      children: Nodes between the brackets.
      close: The closing bracket token, or None when the input ended first.
  """

  open: Token
  children: List[Node] = field(default_factory=list)
  close: Optional[Token] = None

  @property
  def closed(self) -> bool:
    return self.close is not None

  def __str__(self) -> str:
    closing = self.close.text if self.close else ""
    return f"{self.open.text}{render(self.children)}{closing}"


@dataclass
class StructDecl(Node):
  """
  `struct Name<Generics> { field; ... }`.

  Attributes:
      head: Nodes from the `struct` keyword up to the body.
      name: Declared type name.
      generics: Generic parameter list including angle brackets, or "".
      body: The braced field list.
      line: Source line of the keyword.
  """

  head: List[Node]
  name: str
  generics: str
  body: Group
  line: int

  def __str__(self) -> str:
    return f"{render(self.head)}{self.body}"


@dataclass
class TraitDecl(Node):
  """
  `trait Name<Generics> { member; ... }`.

  Attributes mirror `StructDecl`.
  """

  head: List[Node]
  name: str
  generics: str
  body: Group
  line: int

  def __str__(self) -> str:
    return f"{render(self.head)}{self.body}"


@dataclass
class ImplDecl(Node):
  """
  `impl Trait<Generics> for Struct { body }`.

  Attributes:
      head: Nodes from the `impl` keyword up to the body.
      trait: Implemented trait name.
      generics: Trait generic argument list including brackets, or "".
      target: Name of the struct the trait is implemented for.
      target_generics: Struct generic argument list, or "".
      body: The braced implementation body.
      line: Source line of the keyword.
  """

  head: List[Node]
  trait: str
  generics: str
  target: str
  target_generics: str
  body: Group
  line: int

  def __str__(self) -> str:
    return f"{render(self.head)}{self.body}"


@dataclass
class LetBinding(Node):
  """The `let` keyword introducing a binding."""

  keyword: Token

  def __str__(self) -> str:
    return self.keyword.text


@dataclass
class PipeStage(Node):
  """
  One `|> callee(args)` stage of a pipe chain.

  Attributes:
      lead: Trivia before the operator, the `|>` token and trivia after it.
      callee: The function reference (identifier chain or parenthesised expression).
      gap: Whitespace between the callee and its argument list.
      args: The argument list, or None for a bare function reference.
  """

  lead: List[Node]
  callee: List[Node]
  gap: List[Node] = field(default_factory=list)
  args: Optional[Group] = None

  def __str__(self) -> str:
    args = str(self.args) if self.args is not None else ""
    return f"{render(self.lead)}{render(self.callee)}{render(self.gap)}{args}"


@dataclass
class PipeExpr(Node):
  """
  `operand |> stage |> stage ...`.

  Attributes:
      operand: The left-most value expression.
      stages: Stages applied left to right.
      line: Source line of the first `|>`.
  """

  operand: List[Node]
  stages: List[PipeStage]
  line: int = 0

  def __str__(self) -> str:
    return f"{render(self.operand)}{render(self.stages)}"


@dataclass
class Verbatim(Node):
  """Literal output text produced by a pass."""

  text: str

  def __str__(self) -> str:
    return self.text


@dataclass
class Sequence(Node):
  """Output produced by a pass that still contains rewritable children."""

  children: List[Node] = field(default_factory=list)

  def __str__(self) -> str:
    return render(self.children)


def walk(nodes: Iterable[Node]) -> Iterator[Node]:
  """
  Yields every node of a tree, parents before their children.

  Args:
      nodes: Top-level nodes.

  Yields:
      Node: Each node, including pipe stage callees and argument lists.
  """
  for node in nodes:
    yield node
    if isinstance(node, (Group, Sequence)):
      yield from walk(node.children)
    elif isinstance(node, (StructDecl, TraitDecl, ImplDecl)):
      yield from walk([node.body])
    elif isinstance(node, PipeExpr):
      yield from walk(node.operand)
      for stage in node.stages:
        yield from walk(stage.callee)
        if stage.args is not None:
          yield from walk([stage.args])
