"""
Syntax Package.

Lossless lexer and recursive-descent parser for Britescript sources.
"""

from britescript.core.syntax.parser import BritescriptParser
from britescript.core.syntax.tokens import BritescriptLexer, Token, TokenKind

__all__ = ["BritescriptLexer", "BritescriptParser", "Token", "TokenKind"]
