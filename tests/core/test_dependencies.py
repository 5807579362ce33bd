"""
Tests for import dependency extraction.
"""

from britescript.core.dependencies import extract_dependencies


def test_default_named_and_side_effect_imports():
  code = "import React from 'react';\nimport { useState } from 'react';\nimport './styles.css';\n"
  assert extract_dependencies(code) == ["react", "react", "./styles.css"]


def test_double_quotes_and_type_imports():
  code = 'import type { User } from "./models";\nimport * as path from "node:path";'
  assert extract_dependencies(code) == ["./models", "node:path"]


def test_multiline_named_import():
  code = "import {\n  a,\n  b,\n} from '@scope/pkg';"
  assert extract_dependencies(code) == ["@scope/pkg"]


def test_dynamic_import_and_member_access_ignored():
  code = "const mod = await import('./lazy');\nloader.import('x');\nconst s = 'hello';"
  assert extract_dependencies(code) == []


def test_no_imports():
  assert extract_dependencies("const a = 1;") == []
