"""
Tests for the Britescript Lexer.

Verifies:
1. Lossless tokenization (token texts reproduce the input).
2. Opaque literal regions: strings, templates, regexes and comments.
3. Markup recognition in markup-capable mode.
4. Position tracking.
"""

import pytest

from britescript.core.syntax.tokens import BritescriptLexer, TokenKind


def kinds(text, markup=False):
  return [(t.kind, t.text) for t in BritescriptLexer(text, markup=markup).tokenize() if not t.is_trivia]


@pytest.mark.parametrize(
  "text",
  [
    "struct User {\n  name: string;\n}\n",
    "const re = /a\\/b[/]c/gi; // trailing\n",
    "let s = `x ${ { a: 1 }.a } y`;\n",
    "const broken = 'unterminated\nnext",
    "/* open comment",
    "a ||= b >>>= c ?? d?.e",
    "`unterminated ${ x |> f",
    "`a${b}${`c${d}`}`",
  ],
)
def test_lossless(text):
  tokens = BritescriptLexer(text).tokenize()
  assert "".join(t.text for t in tokens) == text


def test_keywords_inside_literals_are_opaque():
  tokens = kinds("const s = \"let x = 1\"; // struct A {}\n/* trait B */")

  assert (TokenKind.STRING, '"let x = 1"') in tokens
  assert all(text != "let" for _, text in tokens)

  trivia = [t for t in BritescriptLexer("x // struct A {}").tokenize() if t.is_trivia]
  assert trivia[-1].kind == TokenKind.LINE_COMMENT


def test_regex_versus_division():
  assert (TokenKind.REGEX, "/ab+c/g") in kinds("x = /ab+c/g;")

  division = kinds("total = a / b / c;")
  assert all(kind != TokenKind.REGEX for kind, _ in division)
  assert division.count((TokenKind.PUNCT, "/")) == 2


def test_template_substitutions_are_code():
  tokens = kinds("f(`sum: ${ {a: 1}.a |> g } let`)")

  assert tokens == [
    (TokenKind.IDENTIFIER, "f"),
    (TokenKind.PUNCT, "("),
    (TokenKind.TEMPLATE, "`sum: "),
    (TokenKind.PUNCT, "${"),
    (TokenKind.PUNCT, "{"),
    (TokenKind.IDENTIFIER, "a"),
    (TokenKind.PUNCT, ":"),
    (TokenKind.NUMBER, "1"),
    (TokenKind.PUNCT, "}"),
    (TokenKind.PUNCT, "."),
    (TokenKind.IDENTIFIER, "a"),
    (TokenKind.PIPE, "|>"),
    (TokenKind.IDENTIFIER, "g"),
    (TokenKind.PUNCT, "}"),
    (TokenKind.TEMPLATE, " let`"),
    (TokenKind.PUNCT, ")"),
  ]


def test_template_without_substitutions_is_single_token():
  assert kinds("`let x = \\` + 1`") == [(TokenKind.TEMPLATE, "`let x = \\` + 1`")]


def test_pipe_operator_token():
  assert kinds("a |> f") == [
    (TokenKind.IDENTIFIER, "a"),
    (TokenKind.PIPE, "|>"),
    (TokenKind.IDENTIFIER, "f"),
  ]


def test_longest_punctuator_wins():
  assert kinds("a === b")[1] == (TokenKind.PUNCT, "===")
  assert kinds("x => y")[1] == (TokenKind.PUNCT, "=>")


def test_markup_element_is_opaque():
  tokens = kinds("return <div className=\"a\">{items.map(i => <li>{i}</li>)}</div>;", markup=True)
  assert (TokenKind.MARKUP, '<div className="a">{items.map(i => <li>{i}</li>)}</div>') in tokens


def test_markup_fragment_and_self_closing():
  assert (TokenKind.MARKUP, "<>text</>") in kinds("const f = <>text</>;", markup=True)
  assert (TokenKind.MARKUP, '<Widget size={2} label="x" />') in kinds(
    'render(<Widget size={2} label="x" />)', markup=True
  )


def test_markup_disabled_or_comparison():
  assert all(kind != TokenKind.MARKUP for kind, _ in kinds("return <div>x</div>;"))
  assert all(kind != TokenKind.MARKUP for kind, _ in kinds("if (a <b) {}", markup=True))


def test_unclosed_markup_falls_back_to_punctuation():
  tokens = kinds("const x = <div>never closed", markup=True)
  assert (TokenKind.PUNCT, "<") in tokens
  assert all(kind != TokenKind.MARKUP for kind, _ in tokens)


def test_positions():
  tokens = [t for t in BritescriptLexer("a\n  bb cc").tokenize() if not t.is_trivia]
  assert [(t.text, t.line, t.column) for t in tokens] == [("a", 1, 1), ("bb", 2, 3), ("cc", 2, 6)]
