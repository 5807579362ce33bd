"""
Tests for the `scan` command.
"""

import io
import json
from unittest.mock import patch

from rich.console import Console

from britescript.cli.__main__ import main
from britescript.utils.console import set_console


def test_scan_json(tmp_path, capsys):
  (tmp_path / "a.bs").write_text("import x from 'x';\nlet a = x |> f;", encoding="utf-8")
  (tmp_path / "b.bs").write_text("export const b = 1;", encoding="utf-8")
  (tmp_path / "c.ts").write_text("let c = 1;", encoding="utf-8")

  assert main(["scan", str(tmp_path), "--json"]) == 0

  reports = json.loads(capsys.readouterr().out)
  assert [r["file"].rsplit("/", 1)[-1] for r in reports] == ["a.bs", "b.bs"]
  assert reports[0]["constructs"] == ["let", "pipe"]
  assert reports[0]["dependencies"] == ["x"]
  assert reports[1]["constructs"] == []


def test_scan_table(tmp_path):
  buf = io.StringIO()
  set_console(Console(file=buf, width=300, force_terminal=False))
  (tmp_path / "a.bs").write_text("struct A { x: number }", encoding="utf-8")

  assert main(["scan", str(tmp_path / "a.bs")]) == 0

  output = buf.getvalue()
  assert "Britescript Scan" in output
  assert "struct" in output


def test_scan_missing_path(tmp_path):
  assert main(["scan", str(tmp_path / "missing")]) == 1


def test_scan_dispatch():
  with patch("britescript.cli.commands.handle_scan", return_value=0) as mock_scan:
    assert main(["scan", "src", "--json"]) == 0
  mock_scan.assert_called_once()
  assert mock_scan.call_args[0][1] is True
