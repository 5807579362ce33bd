"""
Britescript Tokenizer.

Provides a hand-written scanner (`BritescriptLexer`) that decomposes source
text into a lossless stream of typed `Token` objects: joining the text of every
token reproduces the input exactly.

Besides identifiers and punctuation the lexer recognises the lexical regions
whose contents must never be rewritten: string and regular-expression literals,
the text runs of template literals, comments and, for markup-capable files,
embedded markup elements (`<div>...</div>`, `<Widget />`, `<>...</>`). Each
such region is a single opaque token. Template substitutions are code: `${`
is emitted as an opening bracket, the expression is tokenized normally and
the matching `}` resumes the template text.

Malformed input never raises: unterminated literals extend to the end of the
line (or file) and unknown characters become single-character punctuation.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional


class TokenKind(Enum):
  """Enumeration of Britescript token types."""

  WHITESPACE = auto()
  LINE_COMMENT = auto()  # // ...
  BLOCK_COMMENT = auto()  # /* ... */
  STRING = auto()  # 'a' "b"
  TEMPLATE = auto()  # `a ${ and } b` (text runs around substitutions)
  REGEX = auto()  # /ab+c/gi
  NUMBER = auto()  # 42, 0xff, 1.5e3
  IDENTIFIER = auto()  # names and keywords
  PIPE = auto()  # |>
  PUNCT = auto()  # operators and brackets
  MARKUP = auto()  # <div>...</div> in .bsx files


TRIVIA = (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT)


@dataclass
class Token:
  """
  Represents a lexical unit.

  Attributes:
      kind: The type of token.
      text: The raw source text of the token.
      line: Line number in source (1-based).
      column: Column number in source (1-based).
  """

  kind: TokenKind
  text: str
  line: int
  column: int

  @property
  def is_trivia(self) -> bool:
    return self.kind in TRIVIA

  def is_punct(self, *texts: str) -> bool:
    return self.kind == TokenKind.PUNCT and self.text in texts


# Longest operators first so that e.g. '===' wins over '=='.
PUNCTUATORS = sorted(
  [
    ">>>=", "...", "===", "!==", "**=", "<<=", ">>=", ">>>", "&&=", "||=", "??=",
    "=>", "==", "!=", "<=", ">=", "&&", "||", "??", "?.", "++", "--", "+=", "-=",
    "*=", "/=", "%=", "&=", "|=", "^=", "**", "<<", ">>",
  ],
  key=len,
  reverse=True,
)

# After these keywords a '/' starts a regex and a '<' may start markup.
EXPRESSION_KEYWORDS = {
  "return", "typeof", "case", "do", "else", "in", "of", "new", "delete",
  "void", "throw", "yield", "await", "instanceof", "default",
}

_WHITESPACE_RE = re.compile(r"\s+")
_IDENTIFIER_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*")
_NUMBER_RE = re.compile(
  r"0[xXbBoO][0-9a-fA-F_]+n?"
  r"|\d[\d_]*(?:\.[\d_]*)?(?:[eE][+-]?\d+)?n?"
  r"|\.\d[\d_]*(?:[eE][+-]?\d+)?"
)
_TAG_NAME_RE = re.compile(r"[A-Za-z_$][\w$\-.:]*")
_ATTR_NAME_RE = re.compile(r"[A-Za-z_$][\w$\-:]*")
_CLOSE_TAG_RE = re.compile(r"</\s*([A-Za-z_$][\w$\-.:]*)?\s*>")
_REGEX_FLAGS_RE = re.compile(r"[a-z]*")

# Characters after which a '<' inside an embedded expression begins markup.
_MARKUP_LEAD_CHARS = set("(,=[{:?&|!>") | {"", "return"}


class BritescriptLexer:
  """
  Lossless tokenizer for Britescript source.
  """

  def __init__(self, text: str, markup: bool = False) -> None:
    """
    Args:
        text: Raw source code.
        markup: If True, embedded markup elements are recognised as opaque tokens.
    """
    self.text = text
    self.markup = markup
    self.pos = 0
    self.line = 1
    self.col = 1
    self._tokens: List[Token] = []
    self._last_significant: Optional[Token] = None
    # One entry per open brace; True for template substitutions.
    self._braces: List[bool] = []

  def tokenize(self) -> List[Token]:
    """
    Converts the full string into a list of Tokens (trivia included).

    Returns:
        List[Token]: Tokens whose texts concatenate to the input.
    """
    text = self.text
    length = len(text)

    while self.pos < length:
      start = self.pos
      char = text[start]

      if char.isspace():
        match = _WHITESPACE_RE.match(text, start)
        self._emit(TokenKind.WHITESPACE, match.end())
      elif text.startswith("//", start):
        end = text.find("\n", start)
        self._emit(TokenKind.LINE_COMMENT, length if end < 0 else end)
      elif text.startswith("/*", start):
        end = text.find("*/", start + 2)
        self._emit(TokenKind.BLOCK_COMMENT, length if end < 0 else end + 2)
      elif char in "'\"":
        self._emit(TokenKind.STRING, self._scan_string(start))
      elif char == "`":
        self._emit_template_text(start + 1)
      elif char == "/" and self._expression_expected():
        end = self._scan_regex(start)
        if end is None:
          self._emit_punct(start)
        else:
          self._emit(TokenKind.REGEX, end)
      elif char == "<" and self.markup and self._expression_expected() and self._markup_can_start(start):
        end = self._scan_element(start)
        if end is None:
          self._emit_punct(start)
        else:
          self._emit(TokenKind.MARKUP, end)
      elif char.isdigit() or (char == "." and start + 1 < length and text[start + 1].isdigit()):
        match = _NUMBER_RE.match(text, start)
        self._emit(TokenKind.NUMBER, match.end())
      elif text.startswith("|>", start):
        self._emit(TokenKind.PIPE, start + 2)
      elif char == "{":
        self._braces.append(False)
        self._emit(TokenKind.PUNCT, start + 1)
      elif char == "}":
        substitution = self._braces.pop() if self._braces else False
        self._emit(TokenKind.PUNCT, start + 1)
        if substitution:
          self._emit_template_text(start + 1)
      else:
        match = _IDENTIFIER_RE.match(text, start)
        if match:
          self._emit(TokenKind.IDENTIFIER, match.end())
        else:
          self._emit_punct(start)

    return self._tokens

  # --- Emission ---

  def _emit(self, kind: TokenKind, end: int) -> None:
    value = self.text[self.pos : end]
    token = Token(kind, value, self.line, self.col)
    self._tokens.append(token)
    if kind not in TRIVIA:
      self._last_significant = token

    newlines = value.count("\n")
    self.line += newlines
    if newlines > 0:
      self.col = len(value) - value.rfind("\n")
    else:
      self.col += len(value)
    self.pos = end

  def _emit_punct(self, start: int) -> None:
    for punct in PUNCTUATORS:
      if self.text.startswith(punct, start):
        self._emit(TokenKind.PUNCT, start + len(punct))
        return
    self._emit(TokenKind.PUNCT, start + 1)

  def _emit_template_text(self, i: int) -> None:
    """
    Emits template text from the current position up to the closing backtick
    or the next `${`, which is emitted as an opening bracket.

    Args:
        i: Position after the opening backtick or the closing brace of a
            substitution.
    """
    text = self.text
    while i < len(text):
      char = text[i]
      if char == "\\":
        i += 2
      elif char == "`":
        self._emit(TokenKind.TEMPLATE, i + 1)
        return
      elif text.startswith("${", i):
        if i > self.pos:
          self._emit(TokenKind.TEMPLATE, i)
        self._braces.append(True)
        self._emit(TokenKind.PUNCT, i + 2)
        return
      else:
        i += 1
    if self.pos < len(text):
      self._emit(TokenKind.TEMPLATE, len(text))

  # --- Context ---

  def _expression_expected(self) -> bool:
    """
    True if the previous significant token cannot end an expression, so that
    a '/' or '<' here opens a literal rather than acting as an operator.
    """
    prev = self._last_significant
    if prev is None:
      return True
    if prev.kind == TokenKind.PUNCT:
      return prev.text not in (")", "]", "}", "++", "--")
    if prev.kind == TokenKind.PIPE:
      return True
    if prev.kind == TokenKind.IDENTIFIER:
      return prev.text in EXPRESSION_KEYWORDS
    return False

  def _markup_can_start(self, start: int) -> bool:
    nxt = self.text[start + 1 : start + 2]
    return nxt == ">" or nxt.isalpha() or nxt in ("_", "$")

  # --- Literal Scanners ---

  def _scan_string(self, start: int) -> int:
    """Scans a quoted string. Unterminated strings stop at the end of the line."""
    text = self.text
    quote = text[start]
    i = start + 1
    while i < len(text):
      char = text[i]
      if char == "\\":
        i += 2
      elif char == quote:
        return i + 1
      elif char == "\n":
        return i
      else:
        i += 1
    return len(text)

  def _scan_template(self, start: int) -> int:
    """Scans a whole template literal inside an opaque markup region."""
    text = self.text
    i = start + 1
    while i < len(text):
      char = text[i]
      if char == "\\":
        i += 2
      elif char == "`":
        return i + 1
      elif text.startswith("${", i):
        end = self._scan_braces(i + 1)
        if end is None:
          return len(text)
        i = end
      else:
        i += 1
    return len(text)

  def _scan_regex(self, start: int) -> Optional[int]:
    """Scans a regular-expression literal; None if it does not close on its line."""
    text = self.text
    i = start + 1
    in_class = False
    while i < len(text):
      char = text[i]
      if char == "\\":
        i += 2
        continue
      if char == "\n":
        return None
      if in_class:
        if char == "]":
          in_class = False
      elif char == "[":
        in_class = True
      elif char == "/":
        return _REGEX_FLAGS_RE.match(text, i + 1).end()
      i += 1
    return None

  def _scan_braces(self, start: int) -> Optional[int]:
    """
    Scans a balanced `{...}` region (embedded expression) starting at `start`.

    Strings, templates, comments and nested markup inside the region are
    skipped so their braces do not count.

    Returns:
        Position after the closing brace, or None if unbalanced.
    """
    text = self.text
    depth = 0
    i = start
    prev_sig = ""
    while i < len(text):
      char = text[i]
      if char in "'\"":
        i = self._scan_string(i)
        prev_sig = char
        continue
      if char == "`":
        i = self._scan_template(i)
        prev_sig = char
        continue
      if text.startswith("//", i):
        end = text.find("\n", i)
        i = len(text) if end < 0 else end
        continue
      if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        i = len(text) if end < 0 else end + 2
        continue
      if char == "<" and self.markup and prev_sig in _MARKUP_LEAD_CHARS and self._markup_can_start(i):
        end = self._scan_element(i)
        if end is not None:
          i = end
          prev_sig = ">"
          continue
      if char == "{":
        depth += 1
      elif char == "}":
        depth -= 1
        if depth == 0:
          return i + 1
      if not char.isspace():
        prev_sig = "return" if text.endswith("return", 0, i + 1) else char
      i += 1
    return None

  def _skip_ws(self, i: int) -> int:
    while i < len(self.text) and self.text[i].isspace():
      i += 1
    return i

  def _scan_element(self, start: int) -> Optional[int]:
    """
    Scans one markup element (or fragment) starting at '<'.

    Returns:
        Position after the element, or None if the text is not well-formed markup.
    """
    text = self.text
    i = start + 1
    if text.startswith(">", i):
      name = ""
      i += 1
    else:
      match = _TAG_NAME_RE.match(text, i)
      if not match:
        return None
      name = match.group(0)
      i = match.end()

      # Attributes
      while True:
        i = self._skip_ws(i)
        if i >= len(text):
          return None
        if text.startswith("/>", i):
          return i + 2
        if text[i] == ">":
          i += 1
          break
        if text[i] == "{":
          end = self._scan_braces(i)
          if end is None:
            return None
          i = end
          continue
        match = _ATTR_NAME_RE.match(text, i)
        if not match:
          return None
        i = self._skip_ws(match.end())
        if text.startswith("=", i):
          i = self._skip_ws(i + 1)
          if i >= len(text):
            return None
          if text[i] in "'\"":
            end = text.find(text[i], i + 1)
            if end < 0:
              return None
            i = end + 1
          elif text[i] == "{":
            end = self._scan_braces(i)
            if end is None:
              return None
            i = end
          elif text[i] == "<":
            end = self._scan_element(i)
            if end is None:
              return None
            i = end
          else:
            return None

    # Children
    while i < len(text):
      char = text[i]
      if char == "{":
        end = self._scan_braces(i)
        if end is None:
          return None
        i = end
      elif char == "<":
        if text.startswith("</", i):
          match = _CLOSE_TAG_RE.match(text, i)
          if not match or (match.group(1) or "") != name:
            return None
          return match.end()
        end = self._scan_element(i)
        if end is None:
          return None
        i = end
      else:
        i += 1
    return None
