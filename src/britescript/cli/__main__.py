"""
Main Entry Point for britescript CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `britescript.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from britescript.config import parse_cli_key_values
from britescript.cli import commands
from britescript.enums import TargetLevel
from britescript import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="britescript: Britescript to TypeScript compiler")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: COMPILE ---
  cmd_comp = subparsers.add_parser("compile", help="Compile a Britescript file or directory")
  cmd_comp.add_argument("path", type=Path, help="Input source file or directory")
  cmd_comp.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_comp.add_argument(
    "--no-source-map",
    dest="emit_source_map",
    action="store_const",
    const=False,
    default=None,
    help="Do not write .map files (Overrides config)",
  )
  cmd_comp.add_argument(
    "--target",
    default=None,
    choices=[level.value for level in TargetLevel],
    help="Target language level (default: from toml)",
  )
  cmd_comp.add_argument(
    "--no-markup",
    dest="enable_markup_passthrough",
    action="store_const",
    const=False,
    default=None,
    help="Treat .bsx files as plain sources (Overrides config)",
  )
  cmd_comp.add_argument("--build", action="store_true", help="Compile as part of a production build")
  cmd_comp.add_argument("--ssr", action="store_true", help="Compile for server-side rendering")
  cmd_comp.add_argument("--verbose", action="store_true", default=None, help="Log per-file progress")
  cmd_comp.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (events, rewrites) to a JSON file."
  )
  cmd_comp.add_argument(
    "--config",
    nargs="*",
    help="Extra compiler options in key=value format (e.g. strict=True jsx=preserve)",
  )

  # --- Command: SCAN ---
  cmd_scan = subparsers.add_parser("scan", help="Report extended syntax and imports without compiling")
  cmd_scan.add_argument("path", type=Path, help="Input source file or directory")
  cmd_scan.add_argument("--json", action="store_true", help="Output report as JSON")

  args = parser.parse_args(argv)

  if args.command == "compile":
    try:
      extra = parse_cli_key_values(args.config)
    except ValueError as e:
      parser.error(str(e))
    overrides = {
      "emit_source_map": args.emit_source_map,
      "target": args.target,
      "enable_markup_passthrough": args.enable_markup_passthrough,
      "verbose": args.verbose,
      "extra_compiler_options": extra,
    }
    return commands.handle_compile(
      args.path,
      args.out,
      overrides,
      build_mode=args.build,
      is_ssr=args.ssr,
      json_trace_path=args.json_trace,
    )

  elif args.command == "scan":
    return commands.handle_scan(args.path, args.json)

  return 0


if __name__ == "__main__":
  sys.exit(main())
