"""
britescript Package.

A source-to-source compiler for Britescript, a TypeScript dialect extended
with `struct`, `trait`, `impl ... for`, `let` and the `|>` pipe operator.
Output is plain TypeScript that downstream tooling already understands.

Usage
-----

Simple String Compilation
^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import britescript
    code = "let total = prices |> sum"
    print(britescript.transpile(code))
    # const total = sum(prices)

Host Integration (Compiler Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from britescript import CompilerEngine, CompilerOptions

    engine = CompilerEngine(CompilerOptions(emit_source_map=False))
    if engine.should_transform("src/user.bs"):
        res = engine.compile("src/user.bs", source_text)
        if res.success:
            print(res.code, res.dependencies)
        else:
            print(f"Errors: {res.errors}")
"""

from typing import Any

from britescript.config import CompilerOptions
from britescript.core.compile_result import CompileRequest, CompileResult
from britescript.core.engine import CompilerEngine, compile_source
from britescript.core.filter import create_filter
from britescript.enums import TargetLevel

__version__ = "0.1.0"


def transpile(code: str, identifier: str = "module.bs", **options: Any) -> str:
  """
  Compiles a string of Britescript to TypeScript.

  This is a convenience wrapper around `CompilerEngine`. Unlike the engine,
  it raises when compilation fails.

  Args:
      code (str): The Britescript source.
      identifier (str): Identifier of the source; a `.bsx` suffix enables
          markup passthrough.
      **options: `CompilerOptions` fields (e.g. `emit_source_map=False`).

  Returns:
      str: The compiled source code.

  Raises:
      ValueError: If the compilation fails or an option is invalid.
  """
  engine = CompilerEngine(CompilerOptions(**options))
  result = engine.compile(identifier, code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Compilation failed:\n{error_msg}")

  return result.code


__all__ = [
  "CompileRequest",
  "CompileResult",
  "CompilerEngine",
  "CompilerOptions",
  "TargetLevel",
  "compile_source",
  "create_filter",
  "transpile",
  "__version__",
]
