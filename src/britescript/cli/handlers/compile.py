"""
Compile Command Handler.

This module implements the logic for the `britescript compile` command.
It orchestrates:
1. Configuration loading (pyproject.toml plus CLI overrides).
2. File selection through the include/exclude filter.
3. Compilation via the Engine.
4. Output, source map and trace writing.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from rich.table import Table

from britescript.config import CompilerOptions
from britescript.core.compile_result import CompileResult, MARKUP_SUFFIX
from britescript.core.engine import CompilerEngine
from britescript.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

OUTPUT_SUFFIXES = {MARKUP_SUFFIX: ".tsx"}
DEFAULT_OUTPUT_SUFFIX = ".ts"


def output_path_for(source: Path) -> Path:
  """
  Maps a source file name onto its compiled name (`.bs` -> `.ts`, `.bsx` -> `.tsx`).

  Args:
      source: Source file path.

  Returns:
      Path: The output path in the same directory.
  """
  return source.with_suffix(OUTPUT_SUFFIXES.get(source.suffix, DEFAULT_OUTPUT_SUFFIX))


def handle_compile(
  input_path: Path,
  output_path: Optional[Path],
  overrides: Dict[str, Any],
  build_mode: bool = False,
  is_ssr: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'compile' command execution.

  Args:
      input_path: Path to the source file or directory to compile.
      output_path: Output file (single input) or directory (directory input).
      overrides: `CompilerOptions` values given on the command line; None
          entries fall back to the TOML configuration.
      build_mode: Compile as part of a production build.
      is_ssr: Compile for server-side rendering.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    options = CompilerOptions.load(
      search_path=input_path if input_path.is_dir() else input_path.parent,
      **overrides,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  engine = CompilerEngine(options)
  batch_results: Dict[str, CompileResult] = {}

  if input_path.is_file():
    result = _compile_single_file(input_path, output_path, engine, build_mode, is_ssr, json_trace_path)
    batch_results[input_path.name] = result
    if not result.success:
      _print_batch_summary(batch_results)
      return 1

  elif input_path.is_dir():
    if not output_path:
      log_error("Directory compilation requires --out destination directory.")
      return 1

    sources = sorted(p for p in input_path.rglob("*") if p.is_file() and engine.should_transform(p.as_posix()))
    if not sources:
      log_warning(f"No Britescript files found in {input_path}")
      return 0

    log_info(f"Processing {len(sources)} files from {input_path}...")

    for src_file in sources:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / output_path_for(rel_path)

      batch_trace = None
      if json_trace_path:
        # One trace per file, written next to its output.
        batch_trace = dest_file.with_suffix(".trace.json")

      result = _compile_single_file(src_file, dest_file, engine, build_mode, is_ssr, batch_trace)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _compile_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: CompilerEngine,
  build_mode: bool = False,
  is_ssr: bool = False,
  json_trace_path: Optional[Path] = None,
) -> CompileResult:
  """
  Helper to execute compilation on a single file.

  Without an output path the code is printed to stdout and no map is written.

  Args:
      input_path: Source file path.
      output_path: Destination file path.
      engine: Configured compiler engine.
      build_mode: Host build flag.
      is_ssr: Host SSR flag.
      json_trace_path: Path to save trace event logs.

  Returns:
      CompileResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
    result = engine.compile(str(input_path), code, build_mode=build_mode, is_ssr=is_ssr)

    if json_trace_path and result.trace_events:
      try:
        json_trace_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_trace_path, "wt", encoding="utf-8") as f:
          json.dump(result.trace_events, f, indent=2)
        log_info(f"Trace saved to [path]{json_trace_path}[/path]")
      except OSError as e:
        log_error(f"Failed to write trace: {e}")

    if not result.success:
      return result

    if output_path:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
      if result.map is not None:
        map_path = output_path.with_name(f"{output_path.name}.map")
        with open(map_path, "wt", encoding="utf-8") as f:
          f.write(result.map)
      log_success(f"Compiled: [path]{input_path}[/path] -> [path]{output_path}[/path]")
    else:
      print(result.code)

    return result
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to compile {input_path}: {e}")
    return CompileResult(errors=[str(e)])


def _print_batch_summary(results: Dict[str, CompileResult]) -> None:
  """
  Renders a summary table of compilation results to the console.

  Args:
      results: Dictionary mapping filenames to compilation results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if not (r.has_errors or r.has_warnings))
  failures = total - successes

  if failures == 0:
    log_success(f"Batch Complete: {successes}/{total} files compiled cleanly.")
    return

  table = Table(title="Compilation Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if not (res.has_errors or res.has_warnings):
      continue
    status = "Failed" if not res.success else "Warnings"
    issues = "; ".join(res.errors or res.warnings)
    table.add_row(filename, status, issues)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Clean, {failures} with Issues.")
