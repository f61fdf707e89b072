"""
  Lispy Lexer and Parser

- Tokenizes source text and builds a tree of ParseNode objects, the structure
  the reader consumes. The grammar is:

      number : /-?[0-9]+([.][0-9]*)?/
      symbol : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&]+/ | '%' | '^'
      sexpr  : '(' <expr>* ')'
      qexpr  : '{' <expr>* '}'
      expr   : <number> | <symbol> | <sexpr> | <qexpr>
      lispy  : /^/ <expr>* /$/

- Node tags:
    - "root"   the whole input; first and last children are "regex" anchors
    - "number" / "symbol" leaves carry their source text
    - "sexpr" / "qexpr" carry their bracket leaves (tag "char") around the items
- A ';' starts a comment running to the end of the line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from lispy.errors import LispySyntaxError


@dataclass
class ParseNode:
    tag: str
    text: str = ""
    children: list[ParseNode] = field(default_factory=list)


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<number>-?[0-9]+(?:\.[0-9]*)?)"  # tried before symbols, like the grammar
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&]+|%|\^)"
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
)

Token = tuple[str, str, int]

CLOSERS = {"lparen": ("rparen", "sexpr"), "lbrace": ("rbrace", "qexpr")}


def _location(source: str, pos: int) -> str:
    line = source.count("\n", 0, pos) + 1
    col = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return f"{line}:{col}"


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, position) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise LispySyntaxError(
                f"{filename}:{_location(source, pos)}: error: "
                f"unexpected character {source[pos]!r}",
                pos,
            )
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield kind, m.group(kind), m.start()


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], source: str = "", filename: str = "<stdin>"):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.source = source
        self.filename = filename

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def _error(self, message: str, pos: int) -> LispySyntaxError:
        return LispySyntaxError(
            f"{self.filename}:{_location(self.source, pos)}: error: {message}", pos
        )

    def parse_expr(self) -> Optional[ParseNode]:
        tok = self.peek()
        if tok is None:
            return None
        tok_type, tok_val, pos = tok

        if tok_type in ("number", "symbol"):
            self.advance()
            return ParseNode(tok_type, tok_val)

        if tok_type in CLOSERS:
            self.advance()
            closer, tag = CLOSERS[tok_type]
            node = ParseNode(tag, children=[ParseNode("char", tok_val)])
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise self._error(f"unmatched {tok_val!r}", pos)
                if nxt[0] == closer:
                    self.advance()
                    node.children.append(ParseNode("char", nxt[1]))
                    return node
                node.children.append(self.parse_expr())

        raise self._error(f"unexpected {tok_val!r}", pos)

    def parse_all(self) -> Iterator[ParseNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = "<stdin>") -> ParseNode:
    """Parse a whole input into a root node."""
    stream = TokenStream(lex(source, filename), source, filename)
    children = [ParseNode("regex")]
    children.extend(stream.parse_all())
    children.append(ParseNode("regex"))
    return ParseNode("root", children=children)
