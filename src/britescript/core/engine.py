"""
Orchestration Engine for Britescript Compilation.

This module provides the `CompilerEngine`, the driver that turns one
Britescript unit into plain TypeScript. The pipeline is strictly linear:

1.  **Detection**: A cheap pre-scan for extended syntax. Sources without any
    marker are returned byte-identical; no tree is built and no map emitted.

2.  **Parsing**: The lossless lexer and recursive-descent parser build the
    syntax tree. Markup in `.bsx` units becomes opaque tokens when markup
    passthrough is enabled.

3.  **Rewriting**: The declared pass pipeline (struct, trait, impl, let,
    pipe) replaces construct nodes; the tree is rendered back to text.

4.  **Map Emission**: A version 3 source map is attached when enabled and
    the output differs from the input.

5.  **Dependency Extraction**: Import specifiers of the final text.

Any exception raised along the way is converted into a result carrying a
single error message and empty code. The engine never raises across
`compile`.
"""

from typing import Optional

from rich.markup import escape

from britescript.config import CompilerOptions
from britescript.core.compile_result import CompileRequest, CompileResult, SourceUnit
from britescript.core.dependencies import extract_dependencies
from britescript.core.detector import detected_constructs
from britescript.core.filter import create_filter
from britescript.core.rewriter.context import RewriterContext
from britescript.core.rewriter.pipeline import RewriterPipeline, default_pipeline
from britescript.core.source_map import generate_source_map
from britescript.core.syntax.nodes import render
from britescript.core.syntax.parser import BritescriptParser
from britescript.core.tracer import TraceLogger
from britescript.utils.console import log_error, log_info, log_warning

LOG_PREFIX = escape("[britescript]")
PREVIEW_LENGTH = 200


class CompilerEngine:
  """
  The main compilation unit.

  An engine is configured once and may compile any number of files; it holds
  no per-file state.
  """

  def __init__(self, options: Optional[CompilerOptions] = None, pipeline: Optional[RewriterPipeline] = None):
    """
    Initializes the Engine.

    Args:
        options: Compiler options. Defaults are used if None.
        pipeline: Pass pipeline. The standard struct/trait/impl/let/pipe
            order is used if None.
    """
    self.options = options or CompilerOptions()
    self.pipeline = pipeline or default_pipeline()
    self._filter = create_filter(self.options)

  def should_transform(self, identifier: str) -> bool:
    """
    Checks the identifier against the include and exclude patterns.

    Args:
        identifier: Host identifier of a file.

    Returns:
        bool: True if the file is eligible for compilation.
    """
    return self._filter(identifier)

  def compile(self, identifier: str, code: str, build_mode: bool = False, is_ssr: bool = False) -> CompileResult:
    """
    Compiles one unit.

    Args:
        identifier: Host identifier of the file; a `.bsx` suffix enables markup.
        code: Source text.
        build_mode: True when the host produces a production build.
        is_ssr: True when the host compiles for server-side rendering.

    Returns:
        CompileResult: Output code, optional map, dependencies and diagnostics.
    """
    tracer = TraceLogger()
    tracer.start_phase("Compilation", identifier)

    try:
      result = self._compile(identifier, code, build_mode, is_ssr, tracer)
    except Exception as e:
      message = str(e) or e.__class__.__name__
      log_error(f"{LOG_PREFIX} Failed to compile {identifier}: {escape(message)}")
      tracer.end_all_phases()
      return CompileResult(code="", errors=[message], trace_events=tracer.export())

    tracer.end_all_phases()
    result.trace_events = tracer.export()
    return result

  def _compile(
    self, identifier: str, code: str, build_mode: bool, is_ssr: bool, tracer: TraceLogger
  ) -> CompileResult:
    unit = SourceUnit.from_identifier(identifier, code)
    if self.options.verbose:
      log_info(f"{LOG_PREFIX} Compiling {identifier}")

    # --- PHASE 1: DETECTION ---
    constructs = detected_constructs(code)
    tracer.log_detection([c.value for c in constructs])
    if not constructs:
      return CompileResult(code=code, dependencies=extract_dependencies(code))

    if self.options.verbose:
      log_info(f"{LOG_PREFIX} Found Britescript syntax in {identifier}, transforming...")

    # --- PHASE 2: PARSING ---
    tracer.start_phase("Parsing", "Tokens -> Syntax Tree")
    markup = unit.is_markup_variant and self.options.enable_markup_passthrough
    parser = BritescriptParser(code, markup=markup)
    nodes = parser.parse()
    tracer.end_phase()

    context = RewriterContext(unit, self.options, tracer=tracer, build_mode=build_mode, is_ssr=is_ssr)
    for warning in parser.warnings:
      context.warn(warning)

    # --- PHASE 3: REWRITING ---
    tracer.start_phase("Rewriting", " -> ".join(self.pipeline.names))
    nodes = self.pipeline.run(nodes, context)
    tracer.end_phase()
    output = render(nodes)

    if self.options.verbose:
      log_info(f"{LOG_PREFIX} Transformation result preview: {escape(output[:PREVIEW_LENGTH])}...")
    for warning in context.warnings:
      log_warning(f"{LOG_PREFIX} {identifier}: {escape(warning)}")

    # --- PHASE 4: MAP EMISSION ---
    source_map = None
    if self.options.emit_source_map and output != code:
      source_map = generate_source_map(identifier, code)

    # --- PHASE 5: DEPENDENCIES ---
    return CompileResult(
      code=output,
      map=source_map,
      dependencies=extract_dependencies(output),
      warnings=list(context.warnings),
    )


def compile_source(request: CompileRequest) -> CompileResult:
  """
  Compiles a request issued by a build-tool collaborator.

  Args:
      request: Identifier, source text, options and host flags.

  Returns:
      CompileResult: The outcome. Never raises.
  """
  engine = CompilerEngine(request.options)
  return engine.compile(request.identifier, request.source_text, build_mode=request.build_mode, is_ssr=request.is_ssr)
