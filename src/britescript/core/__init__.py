"""
Core Package.

Contains the compilation logic:
- Syntax detection and file filtering
- Lexer, parser and syntax tree
- Rewrite passes and their pipeline
- Dependency extraction and source map emission
"""
