"""
Scan Command Handler.

Reports which files of a tree would be compiled, which extended constructs
each one uses and what it imports, without writing anything.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from rich.table import Table

from britescript.config import CompilerOptions
from britescript.core.dependencies import extract_dependencies
from britescript.core.detector import detected_constructs
from britescript.core.filter import create_filter
from britescript.utils.console import console, log_error, log_info, log_warning


def scan_file(path: Path) -> Dict[str, Any]:
  """
  Scans one file.

  Args:
      path: File to scan.

  Returns:
      Dict with the file name, detected constructs and dependencies.
  """
  code = path.read_text("utf-8")
  return {
    "file": path.as_posix(),
    "constructs": [c.value for c in detected_constructs(code)],
    "dependencies": extract_dependencies(code),
  }


def handle_scan(path: Path, json_mode: bool = False) -> int:
  """
  Scans a file or directory for extended syntax.

  Args:
      path: Input source file or directory.
      json_mode: If True, output JSON to stdout instead of a table.

  Returns:
      int: Exit code (0 on success, 1 if the path is missing or unreadable).
  """
  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  try:
    options = CompilerOptions.load(search_path=path if path.is_dir() else path.parent)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  if path.is_file():
    files = [path]
  else:
    eligible = create_filter(options)
    files = sorted(p for p in path.rglob("*") if p.is_file() and eligible(p.as_posix()))

  if not files:
    log_warning(f"No Britescript files found in {path}")
    return 0

  if not json_mode:
    log_info(f"Scanning {len(files)} files...")

  reports: List[Dict[str, Any]] = []
  failed = False
  for f in files:
    try:
      reports.append(scan_file(f))
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"Failed to read {f.name}: {e}")
      failed = True

  if json_mode:
    print(json.dumps(reports, indent=2))
    return 1 if failed else 0

  table = Table(title="Britescript Scan")
  table.add_column("File", style="cyan")
  table.add_column("Extended Syntax", justify="center")
  table.add_column("Constructs", style="magenta")
  table.add_column("Dependencies", style="green")

  for report in reports:
    has_syntax = "yes" if report["constructs"] else "no"
    table.add_row(report["file"], has_syntax, ", ".join(report["constructs"]), ", ".join(report["dependencies"]))

  console.print(table)
  return 1 if failed else 0
