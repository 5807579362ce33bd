"""
Compiler Configuration Store.

Defines `CompilerOptions`, the validated options record threaded through every
compilation, and the helpers that resolve it from `pyproject.toml`, the CLI and
the process environment.

The environment is only consulted in `CompilerOptions.load` (the boundary used by
the CLI and build hosts); the compiler core never reads it.
"""

import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from britescript.enums import TargetLevel

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

PatternLike = Union[str, Pattern[str]]

ENV_VARS = ("BRITESCRIPT_ENV", "NODE_ENV")

_REGEX_LITERAL = re.compile(r"^/(?P<body>.+)/(?P<flags>[imsx]*)$", re.DOTALL)
_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def compile_pattern(value: Any) -> PatternLike:
  """
  Normalizes a filter pattern.

  Compiled patterns are kept as-is. Strings written as regex literals
  (``/\\.bs$/`` or ``/node_modules/i``) are compiled; any other string is a
  literal substring.

  Args:
      value: A string or compiled pattern.

  Returns:
      PatternLike: Literal substring or compiled regular expression.

  Raises:
      ValueError: If the value is neither a string nor a pattern, or the regex is invalid.
  """
  if isinstance(value, re.Pattern):
    return value
  if not isinstance(value, str):
    raise ValueError(f"Filter patterns must be strings or compiled regexes, got {type(value).__name__}")

  match = _REGEX_LITERAL.match(value)
  if not match:
    return value

  flags = 0
  for char in match.group("flags"):
    flags |= _FLAG_MAP[char]
  try:
    return re.compile(match.group("body"), flags)
  except re.error as e:
    raise ValueError(f"Invalid filter regex '{value}': {e}")


def development_from_env(environ: Optional[Dict[str, str]] = None) -> bool:
  """
  Derives the development flag from the environment.

  ``BRITESCRIPT_ENV`` takes precedence over ``NODE_ENV``.

  Args:
      environ: Mapping to read (defaults to ``os.environ``).

  Returns:
      bool: True if the first variable that is set equals ``development``.
  """
  env = os.environ if environ is None else environ
  for key in ENV_VARS:
    value = env.get(key)
    if value:
      return value.strip().lower() == "development"
  return False


class CompilerOptions(BaseModel):
  """
  Options controlling file selection and the compilation pipeline.
  """

  model_config = ConfigDict(frozen=True)

  include_patterns: List[Any] = Field(
    default_factory=lambda: [re.compile(r"\.bs$"), re.compile(r"\.bsx$")],
    description="Identifiers must match at least one of these patterns.",
  )
  exclude_patterns: List[Any] = Field(
    default_factory=lambda: [re.compile(r"node_modules")],
    description="Identifiers matching any of these patterns are skipped.",
  )
  emit_source_map: bool = Field(True, description="Produce a version 3 source map when code changes.")
  target: TargetLevel = Field(TargetLevel.ES2020, description="Language level passed to the downstream compiler.")
  enable_markup_passthrough: bool = Field(True, description="Keep embedded markup in .bsx files untouched.")
  markup_factory: str = Field("React.createElement", description="Element factory for the downstream markup transform.")
  markup_fragment_factory: str = Field("React.Fragment", description="Fragment factory for the markup transform.")
  development: bool = Field(False, description="Development build (resolved from the environment by `load`).")
  verbose: bool = Field(False, description="Log per-file progress.")
  extra_compiler_options: Dict[str, Any] = Field(default_factory=dict, description="Opaque passthrough options.")

  @field_validator("include_patterns", "exclude_patterns", mode="before")
  @classmethod
  def validate_patterns(cls, v: Any) -> List[PatternLike]:
    """
    Accepts a single pattern or a list and normalizes every entry.

    Args:
        v: Raw pattern value(s).

    Returns:
        List[PatternLike]: Normalized patterns.
    """
    if v is None:
      return []
    if isinstance(v, (str, re.Pattern)):
      v = [v]
    return [compile_pattern(item) for item in v]

  @field_validator("target", mode="before")
  @classmethod
  def validate_target(cls, v: Any) -> Any:
    """
    Normalizes the target level, which is case-insensitive.

    Raises:
        ValueError: If the level is not one of the supported values.
    """
    if isinstance(v, str):
      v_clean = v.lower().strip()
      known = [level.value for level in TargetLevel]
      if v_clean not in known:
        raise ValueError(f"Unknown target level: '{v}'. Supported levels: {known}")
      return v_clean
    return v

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "CompilerOptions":
    """
    Loads options from pyproject.toml and overrides them with explicit values.

    Overrides set to None are ignored so CLI flags that were not given fall back
    to the TOML value. ``extra_compiler_options`` are merged with explicit values
    winning collisions. When ``development`` is not configured anywhere it is
    derived from the environment.

    Args:
        search_path: Directory to start searching for TOML config.
        **overrides: Field values taking precedence over the TOML file.

    Returns:
        CompilerOptions: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    values: Dict[str, Any] = dict(toml_config)
    explicit = {k: v for k, v in overrides.items() if v is not None}

    extra = {**values.get("extra_compiler_options", {}), **explicit.pop("extra_compiler_options", {})}
    values.update(explicit)
    values["extra_compiler_options"] = extra

    if "development" not in values:
      values["development"] = development_from_env()

    known_fields = set(cls.model_fields)
    unknown = sorted(set(values) - known_fields)
    if unknown:
      raise ValueError(f"Unknown britescript options: {unknown}")

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches for pyproject.toml and extracts the [tool.britescript] section.

  Args:
      start_path: Directory to begin the upward search.

  Returns:
      Tuple[Dict[str, Any], Optional[Path]]: Settings and the directory containing the file.
  """
  current = start_path.resolve()
  if current.is_file():
    current = current.parent

  for parent in [current] + list(current.parents):
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      tool_section = data.get("tool", {})
      return tool_section.get("britescript", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.

  Raises:
      ValueError: If an entry has no '=' separator.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      raise ValueError(f"Invalid config format: '{item}'. Expected 'key=value'.")

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str.lower():
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
