"""
Enumerations for britescript.

This module defines the standard enumerations shared by the configuration
layer, the parser and the rewrite passes.
"""

from enum import Enum


class TargetLevel(str, Enum):
  """
  ECMAScript language level requested by the host build tool.

  The rewriter always emits TypeScript; the level is carried through to the
  downstream compiler via the options record.
  """

  ES5 = "es5"
  ES2015 = "es2015"
  ES2020 = "es2020"
  ESNEXT = "esnext"


class Construct(str, Enum):
  """
  The extended-syntax constructs recognised by the detector and rewritten by
  the pipeline, in rewrite order.
  """

  STRUCT = "struct"
  TRAIT = "trait"
  IMPL = "impl"
  LET = "let"
  PIPE = "pipe"
