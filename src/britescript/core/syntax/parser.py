"""
Britescript Parser.

Consumes the token stream of `BritescriptLexer` and builds the tagged syntax
tree defined in `britescript.core.syntax.nodes`. The parser implements a small
recursive descent over brackets: it only understands the extended constructs
(`struct`, `trait`, `impl ... for`, `let`, `|>`) and keeps everything else as
leaves, so the tree renders back to the exact input.

Constructs that start correctly but cannot be completed (a declaration with no
body, an unbalanced body, a pipe stage that is not callable) are left as plain
tokens and reported through `warnings`.
"""

from typing import List, Optional, Tuple

from britescript.core.syntax.nodes import (
  Group,
  ImplDecl,
  LetBinding,
  Leaf,
  Node,
  PipeExpr,
  PipeStage,
  StructDecl,
  TraitDecl,
  render,
)
from britescript.core.syntax.tokens import BritescriptLexer, Token, TokenKind

# `${` opens a template substitution.
BRACKETS = {"(": ")", "[": "]", "{": "}", "${": "}"}
CLOSERS = set(BRACKETS.values())

# Punctuation that ends a pipe operand when scanning backwards.
OPERAND_BOUNDARIES = {
  ";", ",", "=", "=>", "?", ":", "...", ")", "]", "}",
  "+=", "-=", "*=", "/=", "%=", "**=", "<<=", ">>=", ">>>=", "&=", "|=", "^=", "&&=", "||=", "??=",
}

# Keywords that behave like prefix or infix operators inside an operand.
OPERATOR_KEYWORDS = {"typeof", "void", "delete", "await", "new", "as", "satisfies", "instanceof", "keyof"}

MEMBER_ACCESS = (".", "?.")


def _is_significant(node: Node) -> bool:
  return not (isinstance(node, Leaf) and node.is_trivia)


def _is_atom(node: Node) -> bool:
  """True for nodes that form a complete primary expression."""
  if isinstance(node, (Group, PipeExpr)):
    return True
  if isinstance(node, Leaf):
    if node.kind == TokenKind.IDENTIFIER:
      return node.text not in OPERATOR_KEYWORDS
    return node.kind in (TokenKind.NUMBER, TokenKind.STRING, TokenKind.TEMPLATE, TokenKind.REGEX, TokenKind.MARKUP)
  return False


def _is_operand_boundary(node: Node) -> bool:
  if isinstance(node, Leaf):
    if node.kind == TokenKind.PIPE:
      return True
    return node.kind == TokenKind.PUNCT and node.text in OPERAND_BOUNDARIES
  return not (isinstance(node, (Group, PipeExpr)))


class BritescriptParser:
  """
  Parses Britescript source into a list of syntax tree nodes.
  """

  def __init__(self, text: str, markup: bool = False):
    """
    Args:
        text: Raw source code.
        markup: If True, embedded markup is tokenized as opaque leaves.
    """
    self.lexer = BritescriptLexer(text, markup=markup)
    self.tokens = self.lexer.tokenize()
    self.pos = 0
    self.warnings: List[str] = []

  def parse(self) -> List[Node]:
    """
    Main entry point.

    Returns:
        List[Node]: Top-level nodes of the file.
    """
    nodes, _ = self._parse_sequence(closer=None)
    return nodes

  # --- Parser Primitives ---

  def _peek(self, offset: int = 0) -> Optional[Token]:
    idx = self.pos + offset
    if idx >= len(self.tokens):
      return None
    return self.tokens[idx]

  def _consume(self) -> Token:
    token = self.tokens[self.pos]
    self.pos += 1
    return token

  def _is_eof(self) -> bool:
    return self.pos >= len(self.tokens)

  def _take_trivia(self, allow_newlines: bool = True) -> List[Node]:
    """Consumes whitespace and comments."""
    taken: List[Node] = []
    while not self._is_eof() and self._peek().is_trivia:
      if not allow_newlines and "\n" in self._peek().text:
        break
      taken.append(Leaf(self._consume()))
    return taken

  def _warn(self, line: int, message: str) -> None:
    self.warnings.append(f"line {line}: {message}")

  # --- Sequences & Groups ---

  def _parse_sequence(self, closer: Optional[str]) -> Tuple[List[Node], Optional[Token]]:
    """
    Parses nodes until `closer` (or end of input for the top level).

    Returns:
        Tuple of the parsed nodes and the closing token (None if input ended).
    """
    items: List[Node] = []
    while not self._is_eof():
      token = self._peek()

      if token.kind == TokenKind.PUNCT:
        if closer is not None and token.text == closer:
          return items, self._consume()
        if token.text in BRACKETS:
          items.append(self._parse_group())
          continue

      elif token.kind == TokenKind.IDENTIFIER and not self._after_member_access(items):
        node = self._try_construct(token)
        if node is not None:
          items.append(node)
          continue

      elif token.kind == TokenKind.PIPE:
        self._parse_pipe(items)
        continue

      items.append(Leaf(self._consume()))

    return items, None

  def _parse_group(self) -> Group:
    open_token = self._consume()
    children, close = self._parse_sequence(BRACKETS[open_token.text])
    return Group(open_token, children, close)

  def _after_member_access(self, items: List[Node]) -> bool:
    for node in reversed(items):
      if _is_significant(node):
        return isinstance(node, Leaf) and node.kind == TokenKind.PUNCT and node.text in MEMBER_ACCESS
    return False

  def _try_construct(self, token: Token) -> Optional[Node]:
    if token.text == "let":
      return self._try_let()
    if token.text in ("struct", "trait"):
      return self._try_declaration()
    if token.text == "impl":
      return self._try_impl()
    return None

  # --- let ---

  def _try_let(self) -> Optional[LetBinding]:
    """`let` followed by whitespace and a binding name or destructuring pattern."""
    nxt = self._peek(1)
    if nxt is None or nxt.kind != TokenKind.WHITESPACE:
      return None
    after = self._peek(2)
    if after is None:
      return None
    if after.kind == TokenKind.IDENTIFIER or after.is_punct("[", "{"):
      return LetBinding(self._consume())
    return None

  # --- struct / trait ---

  def _try_declaration(self) -> Optional[Node]:
    """
    Parses `struct Name<G> { ... }` or `trait Name<G> { ... }`.
    Restores the position and returns None if the input does not match.
    """
    start = self.pos
    keyword = self._consume()
    head: List[Node] = [Leaf(keyword)]

    gap = self._take_trivia()
    name = self._peek()
    if not gap or name is None or name.kind != TokenKind.IDENTIFIER:
      self.pos = start
      return None
    head.extend(gap)
    head.append(Leaf(self._consume()))

    generics = self._parse_generics()
    if generics is None:
      self._warn(keyword.line, f"{keyword.text} '{name.text}' has malformed generic parameters; left unchanged")
      self.pos = start
      return None
    head.extend(generics)

    body = self._parse_body(keyword, name.text)
    if body is None:
      self.pos = start
      return None

    head_nodes, body_group = body
    head.extend(head_nodes)
    cls = StructDecl if keyword.text == "struct" else TraitDecl
    return cls(head=head, name=name.text, generics=render(generics), body=body_group, line=keyword.line)

  # --- impl ---

  def _try_impl(self) -> Optional[ImplDecl]:
    """Parses `impl Trait<G> for Struct<G> { ... }`."""
    start = self.pos
    keyword = self._consume()
    head: List[Node] = [Leaf(keyword)]

    gap = self._take_trivia()
    trait = self._peek()
    if not gap or trait is None or trait.kind != TokenKind.IDENTIFIER:
      self.pos = start
      return None
    head.extend(gap)
    head.append(Leaf(self._consume()))

    generics = self._parse_generics()
    if generics is None:
      self.pos = start
      return None
    head.extend(generics)

    gap = self._take_trivia()
    for_kw = self._peek()
    if not gap or for_kw is None or for_kw.kind != TokenKind.IDENTIFIER or for_kw.text != "for":
      self.pos = start
      return None
    head.extend(gap)
    head.append(Leaf(self._consume()))

    gap = self._take_trivia()
    target = self._peek()
    if not gap or target is None or target.kind != TokenKind.IDENTIFIER:
      self._warn(keyword.line, f"impl '{trait.text}' has no target type; left unchanged")
      self.pos = start
      return None
    head.extend(gap)
    head.append(Leaf(self._consume()))

    target_generics = self._parse_generics()
    if target_generics is None:
      self.pos = start
      return None
    head.extend(target_generics)

    body = self._parse_body(keyword, f"{trait.text} for {target.text}")
    if body is None:
      self.pos = start
      return None

    head_nodes, body_group = body
    head.extend(head_nodes)
    return ImplDecl(
      head=head,
      trait=trait.text,
      generics=render(generics),
      target=target.text,
      target_generics=render(target_generics),
      body=body_group,
      line=keyword.line,
    )

  # --- Declaration Helpers ---

  def _parse_generics(self) -> Optional[List[Node]]:
    """
    Parses an optional `<...>` list directly after a name.

    Returns:
        The nodes of the list (empty if absent), or None if it is unbalanced.
    """
    token = self._peek()
    if token is None or not token.is_punct("<"):
      return []

    nodes: List[Node] = []
    depth = 0
    while not self._is_eof():
      token = self._peek()
      if token.kind == TokenKind.PUNCT:
        if token.text in BRACKETS:
          group = self._parse_group()
          if not group.closed:
            return None
          nodes.append(group)
          continue
        if token.text in CLOSERS or token.text == ";":
          return None
        if set(token.text) <= {"<", ">"}:
          depth += token.text.count("<") - token.text.count(">")
          nodes.append(Leaf(self._consume()))
          if depth == 0:
            return nodes
          if depth < 0:
            return None
          continue
      nodes.append(Leaf(self._consume()))
    return None

  def _parse_body(self, keyword: Token, label: str) -> Optional[Tuple[List[Node], Group]]:
    """
    Parses the trivia and braced body following a declaration head.

    Returns:
        Tuple of the trivia nodes and the body group, or None (with a warning).
    """
    trivia = self._take_trivia()
    token = self._peek()
    if token is None or not token.is_punct("{"):
      self._warn(keyword.line, f"{keyword.text} '{label}' has no body; left unchanged")
      return None
    body = self._parse_group()
    if not body.closed:
      self._warn(keyword.line, f"{keyword.text} '{label}' has no closing brace; left unchanged")
      return None
    return trivia, body

  # --- Pipes ---

  def _split_operand(self, items: List[Node]) -> Tuple[int, int]:
    """
    Locates the left operand of a pipe at the end of `items`.

    The operand extends backwards to the nearest expression boundary: a
    separator or assignment, a declaration, or two primary expressions that
    are only separated by whitespace (`return x`, `if (c) x`).

    Returns:
        Tuple (start, end) such that `items[start:end]` is the operand and
        `items[end:]` is the trivia before the operator.
    """
    end = len(items)
    while end > 0 and not _is_significant(items[end - 1]):
      end -= 1

    start = end
    idx = end - 1
    pending_trivia = False
    while idx >= 0:
      node = items[idx]
      if not _is_significant(node):
        pending_trivia = True
        idx -= 1
        continue
      if _is_operand_boundary(node):
        break
      if pending_trivia and start < end and _is_atom(node) and _is_atom(items[start]):
        break
      start = idx
      pending_trivia = False
      idx -= 1
    return start, end

  def _parse_pipe(self, items: List[Node]) -> None:
    """
    Folds `operand |> stage (|> stage)*` into a `PipeExpr` at the end of `items`.
    """
    pipe_token = self._peek()
    start, end = self._split_operand(items)
    if start == end:
      self._warn(pipe_token.line, "pipe operator without a left operand; left unchanged")
      items.append(Leaf(self._consume()))
      return

    checkpoint = self.pos
    first = self._parse_stage(list(items[end:]))
    if first is None:
      self.pos = checkpoint
      self._warn(pipe_token.line, "pipe stage is not a function reference or call; left unchanged")
      items.append(Leaf(self._consume()))
      return

    stages = [first]
    while True:
      checkpoint = self.pos
      trivia = self._take_trivia()
      token = self._peek()
      if token is None or token.kind != TokenKind.PIPE:
        self.pos = checkpoint
        break
      stage = self._parse_stage(trivia)
      if stage is None:
        # The sequence loop reports the stray operator.
        self.pos = checkpoint
        break
      stages.append(stage)

    operand = items[start:end]
    del items[start:]
    items.append(PipeExpr(operand=operand, stages=stages, line=pipe_token.line))

  def _parse_stage(self, lead: List[Node]) -> Optional[PipeStage]:
    """
    Parses `|> callee` or `|> callee(args)` where the callee is an identifier
    chain (`f`, `utils.format`) or a parenthesised expression.
    """
    lead = lead + [Leaf(self._consume())]
    lead.extend(self._take_trivia())

    token = self._peek()
    callee: List[Node] = []
    if token is not None and token.kind == TokenKind.IDENTIFIER and token.text not in OPERATOR_KEYWORDS:
      callee.append(Leaf(self._consume()))
      while True:
        dot, name = self._peek(), self._peek(1)
        if dot is None or not dot.is_punct(*MEMBER_ACCESS) or name is None or name.kind != TokenKind.IDENTIFIER:
          break
        callee.append(Leaf(self._consume()))
        callee.append(Leaf(self._consume()))
    elif token is not None and token.is_punct("("):
      group = self._parse_group()
      if not group.closed:
        return None
      callee.append(group)
    else:
      return None

    checkpoint = self.pos
    gap = self._take_trivia(allow_newlines=False)
    token = self._peek()
    if token is not None and token.is_punct("("):
      args = self._parse_group()
      if not args.closed:
        return None
      return PipeStage(lead=lead, callee=callee, gap=gap, args=args)

    self.pos = checkpoint
    return PipeStage(lead=lead, callee=callee)
