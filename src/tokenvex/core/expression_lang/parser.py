"""
Parser for calc expressions.

Binary operators are parsed by precedence level from ``_LEVELS`` (loosest
first), all left-associative. Below them sit unary signs and the atoms:
numbers, references, function calls and parenthesized groups.
"""

from __future__ import annotations

from tokenvex.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    tokenize,
)
from tokenvex.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    FuncCall,
    NumberLiteral,
    RefName,
    UnaryExpr,
    UnaryOp,
)

_LEVELS: tuple[dict[TokenKind, BinaryOp], ...] = (
    {TokenKind.PLUS: BinaryOp.ADD, TokenKind.MINUS: BinaryOp.SUB},
    {TokenKind.STAR: BinaryOp.MUL, TokenKind.SLASH: BinaryOp.DIV},
)

_SIGNS = {TokenKind.MINUS: UnaryOp.NEG, TokenKind.PLUS: UnaryOp.POS}


class ExpressionParseError(Exception):
    """Raised when an expression does not match the grammar."""

    def __init__(self, message: str, pos: int = 0) -> None:
        super().__init__(message)
        self.pos = pos


def _describe(token: Token) -> str:
    return "end of expression" if token.kind == TokenKind.EOF else repr(token.value)


class _Cursor:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._index = 0

    def peek(self) -> Token:
        return self._tokens[self._index]

    def take(self) -> Token:
        token = self._tokens[self._index]
        # EOF is never consumed
        if token.kind != TokenKind.EOF:
            self._index += 1
        return token

    def require(self, kind: TokenKind) -> Token:
        token = self.peek()
        if token.kind != kind:
            raise ExpressionParseError(
                f"Expected {kind.value!r}, got {_describe(token)}", token.pos
            )
        return self.take()

    def skip(self, kind: TokenKind) -> bool:
        if self.peek().kind == kind:
            self.take()
            return True
        return False

    # -- grammar --

    def binary(self, level: int = 0) -> Expr:
        if level == len(_LEVELS):
            return self.signed()
        operators = _LEVELS[level]
        node = self.binary(level + 1)
        while self.peek().kind in operators:
            op = operators[self.take().kind]
            node = BinaryExpr(op=op, left=node, right=self.binary(level + 1))
        return node

    def signed(self) -> Expr:
        kind = self.peek().kind
        if kind in _SIGNS:
            self.take()
            return UnaryExpr(op=_SIGNS[kind], operand=self.signed())
        return self.atom()

    def atom(self) -> Expr:
        token = self.take()
        match token.kind:
            case TokenKind.NUMBER:
                return NumberLiteral(value=float(token.value))
            case TokenKind.IDENT if self.peek().kind == TokenKind.LPAREN:
                return self.call(token.value)
            case TokenKind.IDENT:
                return RefName(name=token.value)
            case TokenKind.LPAREN:
                inner = self.binary()
                self.require(TokenKind.RPAREN)
                return inner
            case TokenKind.EOF:
                raise ExpressionParseError("Unexpected end of expression", token.pos)
            case _:
                raise ExpressionParseError(f"Unexpected token {token.value!r}", token.pos)

    def call(self, name: str) -> FuncCall:
        self.require(TokenKind.LPAREN)
        args: list[Expr] = []
        if not self.skip(TokenKind.RPAREN):
            args.append(self.binary())
            while self.skip(TokenKind.COMMA):
                args.append(self.binary())
            self.require(TokenKind.RPAREN)
        return FuncCall(name=name, args=args)


def parse_expr(source: str) -> Expr:
    """Parse ``source`` into an expression tree.

    Scanner errors surface as ``ExpressionParseError`` too.
    """
    try:
        tokens = tokenize(source)
    except ExpressionTokenError as e:
        raise ExpressionParseError(str(e), e.pos) from e

    cursor = _Cursor(tokens)
    if cursor.peek().kind == TokenKind.EOF:
        raise ExpressionParseError("Empty expression", 0)

    tree = cursor.binary()
    trailing = cursor.peek()
    if trailing.kind != TokenKind.EOF:
        raise ExpressionParseError(
            f"Unexpected token {trailing.value!r} after expression", trailing.pos
        )
    return tree
