"""
Tests for the struct to type alias pass.
"""

import pytest

from britescript.core.rewriter.passes.struct import StructPass


@pytest.mark.parametrize(
  "code, expected",
  [
    (
      "struct User { name: string; age: number; }",
      "type User = {\n  name: string;\n  age: number;\n};",
    ),
    (
      "struct Container<T> {\n  value: T;\n  count: number;\n}",
      "type Container<T> = {\n  value: T;\n  count: number;\n};",
    ),
    # Missing trailing separator and blank fields
    ("struct P { x: number;; y: number }", "type P = {\n  x: number;\n  y: number;\n};"),
    ("struct Empty {}", "type Empty = {};"),
    ("export struct A { x: T }", "export type A = {\n  x: T;\n};"),
  ],
)
def test_struct_to_type_alias(run_pass, code, expected):
  result, _ = run_pass(code, StructPass())
  assert result == expected


def test_nested_object_type_stays_in_its_field(run_pass):
  code = "struct M { meta: { a: string; b: number }; id: string }"
  result, _ = run_pass(code, StructPass())
  assert result == "type M = {\n  meta: { a: string; b: number };\n  id: string;\n};"


def test_surrounding_code_untouched(run_pass):
  code = "// models\nstruct U { n: string }\nconst s = 'struct X { }';\n"
  result, _ = run_pass(code, StructPass())
  assert result == "// models\ntype U = {\n  n: string;\n};\nconst s = 'struct X { }';\n"


def test_rewrite_is_traced(run_pass):
  _, context = run_pass("struct U { n: string }", StructPass())
  (event,) = context.tracer.export()
  assert event["metadata"]["before"] == "struct U { n: string }"
  assert event["metadata"]["after"].startswith("type U = {")
