"""
Tests for the Britescript Parser.

Verifies:
1. Construct nodes for struct, trait, impl, let and pipe chains.
2. Lossless rendering of unmodified trees.
3. Malformed constructs degrade to plain tokens with a warning.
"""

import pytest

from britescript.core.syntax.nodes import (
  Group,
  ImplDecl,
  LetBinding,
  Leaf,
  PipeExpr,
  Sequence,
  StructDecl,
  TraitDecl,
  render,
)
from britescript.core.syntax.parser import BritescriptParser


def parse(text, markup=False):
  parser = BritescriptParser(text, markup=markup)
  return parser.parse(), parser.warnings


def significant(nodes):
  return [n for n in nodes if not (isinstance(n, Leaf) and n.is_trivia)]


def find(nodes, cls):
  """Depth-first search for nodes of a type."""
  found = []
  for node in nodes:
    if isinstance(node, cls):
      found.append(node)
    if isinstance(node, (Group, Sequence)):
      found.extend(find(node.children, cls))
    elif isinstance(node, (StructDecl, TraitDecl, ImplDecl)):
      found.extend(find([node.body], cls))
    elif isinstance(node, PipeExpr):
      found.extend(find(node.operand, cls))
      for stage in node.stages:
        found.extend(find(stage.callee, cls))
        if stage.args is not None:
          found.extend(find([stage.args], cls))
  return found


SAMPLE = """import { log } from './log';

export struct Point<T extends Array<number>> {
  x: T; // horizontal
  y: T;
}

trait Shape { area(): number; }

impl Shape for Point<number[]> {
  area() {
    let scale = 2;
    return this.data.x |> sum |> multiply(scale);
  }
}
const s = "struct Fake { }";
"""


def test_roundtrip_is_lossless():
  nodes, warnings = parse(SAMPLE)
  assert render(nodes) == SAMPLE
  assert warnings == []


def test_struct_declaration():
  nodes, _ = parse("struct Box<T extends Array<string>> { value: T; }")
  (decl,) = significant(nodes)

  assert isinstance(decl, StructDecl)
  assert decl.name == "Box"
  assert decl.generics == "<T extends Array<string>>"
  assert decl.body.closed
  assert decl.line == 1


def test_trait_declaration():
  nodes, _ = parse("\n\ntrait Displayable {\n  display(): string;\n}")
  (decl,) = significant(nodes)

  assert isinstance(decl, TraitDecl)
  assert decl.name == "Displayable"
  assert decl.generics == ""
  assert decl.line == 3


def test_impl_declaration():
  nodes, _ = parse("impl Display<T> for Point<T> { show() {} }")
  (decl,) = significant(nodes)

  assert isinstance(decl, ImplDecl)
  assert decl.trait == "Display"
  assert decl.generics == "<T>"
  assert decl.target == "Point"
  assert decl.target_generics == "<T>"


def test_keyword_used_as_identifier_is_not_a_construct():
  nodes, warnings = parse("const struct = 1; obj.let = 2; letter = 3;")
  assert find(nodes, StructDecl) == []
  assert find(nodes, LetBinding) == []
  assert warnings == []


def test_let_bindings():
  nodes, _ = parse("let a = 1;\nlet [b, c] = pair;\nlet { d } = obj;")
  assert len(find(nodes, LetBinding)) == 3


def test_pipe_chain_structure():
  nodes, _ = parse("const y = x |> f |> g(1);")
  (pipe,) = find(nodes, PipeExpr)

  assert render(pipe.operand) == "x"
  assert [render(s.callee) for s in pipe.stages] == ["f", "g"]
  assert pipe.stages[0].args is None
  assert str(pipe.stages[1].args) == "(1)"


@pytest.mark.parametrize(
  "code, operand",
  [
    ("return data |> clean;", "data"),
    ("const t = a + b |> f;", "a + b"),
    ("load(path) |> parse", "load(path)"),
    ("f(x |> g, y)", "x"),
    ("const v = await fetchAll() |> merge;", "await fetchAll()"),
    ("if (ready) value |> emit;", "value"),
  ],
)
def test_pipe_operand_boundaries(code, operand):
  nodes, _ = parse(code)
  (pipe,) = find(nodes, PipeExpr)
  assert render(pipe.operand) == operand


def test_multiline_pipe_chain():
  nodes, _ = parse("const r = value\n  |> double\n  |> square;")
  (pipe,) = find(nodes, PipeExpr)
  assert len(pipe.stages) == 2


def test_pipe_inside_markup_is_not_parsed():
  nodes, _ = parse("const v = <p>{a |> b}</p>;", markup=True)
  assert find(nodes, PipeExpr) == []


@pytest.mark.parametrize(
  "code, message",
  [
    ("struct User\nconst x = 1;", "line 1: struct 'User' has no body; left unchanged"),
    ("trait T {\n  a(): void;\n", "line 1: trait 'T' has no closing brace; left unchanged"),
    ("impl Show for {}", "line 1: impl 'Show' has no target type; left unchanged"),
    ("\nx |> 42", "line 2: pipe stage is not a function reference or call; left unchanged"),
    ("|> f", "line 1: pipe operator without a left operand; left unchanged"),
  ],
)
def test_malformed_constructs_warn_and_pass_through(code, message):
  nodes, warnings = parse(code)
  assert message in warnings
  assert render(nodes) == code
