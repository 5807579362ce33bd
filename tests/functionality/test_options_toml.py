"""
Tests for Config Persistence (TOML).

Verifies that:
1. CompilerOptions.load() picks up [tool.britescript] from pyproject.toml.
2. Explicit overrides win over TOML settings.
3. extra_compiler_options are merged (overrides win collisions).
4. File traversal finds toml in parent directories.
5. The development flag falls back to the environment.
"""

import re

import pytest

from britescript.config import CompilerOptions
from britescript.enums import TargetLevel


@pytest.fixture
def toml_file(tmp_path):
  """Creates a dummy pyproject.toml in the temp dir."""
  fpath = tmp_path / "pyproject.toml"
  content = """
[tool.britescript]
emit_source_map = false
target = "esnext"
include_patterns = ['/\\.bs$/', "components/"]
verbose = true

[tool.britescript.extra_compiler_options]
strict = true
jsx = "preserve"
"""
  fpath.write_text(content, encoding="utf-8")
  return fpath


def test_load_defaults_from_toml(tmp_path, toml_file, no_env):
  """
  Scenario: Options are loaded inside a configured project.
  Expect: Values match TOML.
  """
  options = CompilerOptions.load(search_path=tmp_path)

  assert options.emit_source_map is False
  assert options.target == TargetLevel.ESNEXT
  assert options.verbose is True
  assert options.include_patterns[0].pattern == r"\.bs$"
  assert options.include_patterns[1] == "components/"
  assert options.extra_compiler_options == {"strict": True, "jsx": "preserve"}
  assert options.development is False


def test_overrides_win(tmp_path, toml_file):
  options = CompilerOptions.load(search_path=tmp_path, target="es5", verbose=None)

  assert options.target == TargetLevel.ES5  # override wins
  assert options.verbose is True  # None falls back to TOML
  assert options.emit_source_map is False  # TOML fallback


def test_extra_options_merge(tmp_path, toml_file):
  options = CompilerOptions.load(search_path=tmp_path, extra_compiler_options={"jsx": "react", "lib": "dom"})

  assert options.extra_compiler_options == {"strict": True, "jsx": "react", "lib": "dom"}


def test_search_walks_up(tmp_path, toml_file):
  nested = tmp_path / "src" / "components"
  nested.mkdir(parents=True)

  options = CompilerOptions.load(search_path=nested)
  assert options.target == TargetLevel.ESNEXT


def test_unknown_key_rejected(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.britescript]\nsourceMaps = true\n", encoding="utf-8")

  with pytest.raises(ValueError, match="sourceMaps"):
    CompilerOptions.load(search_path=tmp_path)


def test_development_from_environment(tmp_path, monkeypatch):
  (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
  monkeypatch.delenv("BRITESCRIPT_ENV", raising=False)
  monkeypatch.setenv("NODE_ENV", "development")

  assert CompilerOptions.load(search_path=tmp_path).development is True
  assert CompilerOptions.load(search_path=tmp_path, development=False).development is False


def test_development_in_toml_beats_environment(tmp_path, monkeypatch):
  (tmp_path / "pyproject.toml").write_text("[tool.britescript]\ndevelopment = false\n", encoding="utf-8")
  monkeypatch.setenv("BRITESCRIPT_ENV", "development")

  assert CompilerOptions.load(search_path=tmp_path).development is False


def test_defaults_without_toml(tmp_path, no_env):
  options = CompilerOptions.load(search_path=tmp_path)

  assert options.emit_source_map is True
  assert options.target == TargetLevel.ES2020
  assert [p.pattern for p in options.include_patterns] == [r"\.bs$", r"\.bsx$"]
  assert isinstance(options.exclude_patterns[0], re.Pattern)
