"""Recursive-descent parser for gettext plural expressions.

Grammar (C precedence, lowest binding first):

    expression  := logical_or [ "?" expression ":" expression ]
    logical_or  := logical_and { "||" logical_and }
    logical_and := equality { "&&" equality }
    equality    := relational { ("==" | "!=") relational }
    relational  := modulo { ("<" | "<=" | ">" | ">=") modulo }
    modulo      := unary { "%" unary }
    unary       := "!" unary | primary
    primary     := INTEGER | "n" | "(" expression ")"

The ternary is right-associative, so ``a ? 0 : b ? 1 : 2`` reads as
``a ? 0 : (b ? 1 : 2)``. Spaces are insignificant.

The parser only accepts tokens of this grammar; callers are still expected
to run the character whitelist first (see evaluator.evaluate_plural).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

from msgcatalog.core.depth_guard import DepthGuard

from .ast import BinaryOp, BinaryOperator, Conditional, Not, NumberLiteral, PluralNode, Quantity

__all__ = ["PluralParseError", "PluralParser", "Token", "TokenKind", "tokenize"]


class PluralParseError(ValueError):
    """Token sequence does not form a plural expression.

    Attributes:
        position: Character offset where parsing failed
    """

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


class TokenKind(StrEnum):
    """Lexical categories of the plural grammar."""

    NUMBER = "number"
    QUANTITY = "quantity"
    OPERATOR = "operator"
    NOT = "not"
    LPAREN = "lparen"
    RPAREN = "rparen"
    QUESTION = "question"
    COLON = "colon"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """Single lexical token with its source offset."""

    kind: TokenKind
    text: str
    position: int


_DIGITS = "0123456789"
_TWO_CHAR_OPERATORS = frozenset({"||", "&&", "==", "!=", "<=", ">="})
_SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "<": TokenKind.OPERATOR,
    ">": TokenKind.OPERATOR,
    "%": TokenKind.OPERATOR,
    "!": TokenKind.NOT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "?": TokenKind.QUESTION,
    ":": TokenKind.COLON,
}


def tokenize(source: str) -> tuple[Token, ...]:
    """Split a plural expression into tokens.

    Args:
        source: Plural expression text

    Returns:
        Tokens, always terminated by an EOF token

    Raises:
        PluralParseError: On a character that starts no token (including a
            lone '=', '&' or '|', which are not operators of the grammar)

    Example:
        >>> [t.text for t in tokenize("n != 1")]
        ['n', '!=', '1', '']
    """
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        char = source[pos]

        if char == " ":
            pos += 1
            continue

        if char in _DIGITS:
            start = pos
            while pos < length and source[pos] in _DIGITS:
                pos += 1
            tokens.append(Token(TokenKind.NUMBER, source[start:pos], start))
            continue

        if char == "n":
            tokens.append(Token(TokenKind.QUANTITY, char, pos))
            pos += 1
            continue

        pair = source[pos : pos + 2]
        if pair in _TWO_CHAR_OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, pair, pos))
            pos += 2
            continue

        kind = _SINGLE_CHAR_TOKENS.get(char)
        if kind is None:
            msg = f"Unexpected character {char!r}"
            raise PluralParseError(msg, pos)
        tokens.append(Token(kind, char, pos))
        pos += 1

    tokens.append(Token(TokenKind.EOF, "", length))
    return tuple(tokens)


class PluralParser:
    """Parses one plural expression into a PluralNode tree.

    Instances are single-use: create one per expression.

    Example:
        >>> PluralParser("(n > 1)").parse()
        BinaryOp(operator=<BinaryOperator.GT: '>'>, left=Quantity(), right=NumberLiteral(value=1))
    """

    __slots__ = ("_guard", "_index", "_tokens")

    def __init__(self, source: str, *, max_depth: int | None = None) -> None:
        self._tokens = tokenize(source)
        self._index = 0
        self._guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)

    def parse(self) -> PluralNode:
        """Parse the whole expression.

        Raises:
            PluralParseError: On malformed or trailing input
            DepthLimitExceededError: On excessive nesting
        """
        node = self._parse_expression()
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            msg = f"Unexpected {token.text!r} after complete expression"
            raise PluralParseError(msg, token.position)
        return node

    # ------------------------------------------------------------------
    # Token stream
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind is not TokenKind.EOF:
            self._index += 1
        return token

    def _expect(self, kind: TokenKind, what: str) -> Token:
        token = self._peek()
        if token.kind is not kind:
            found = "end of expression" if token.kind is TokenKind.EOF else repr(token.text)
            msg = f"Expected {what}, found {found}"
            raise PluralParseError(msg, token.position)
        return self._advance()

    def _match_operator(self, *operators: str) -> BinaryOperator | None:
        token = self._peek()
        if token.kind is TokenKind.OPERATOR and token.text in operators:
            self._advance()
            return BinaryOperator(token.text)
        return None

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_expression(self) -> PluralNode:
        with self._guard:
            test = self._parse_binary_level(0)
            if self._peek().kind is not TokenKind.QUESTION:
                return test
            self._advance()
            consequent = self._parse_expression()
            self._expect(TokenKind.COLON, "':'")
            alternative = self._parse_expression()
            return Conditional(test, consequent, alternative)

    def _parse_binary_level(self, level: int) -> PluralNode:
        # Left-associative levels, loosest first; below the last one is unary.
        if level == len(_BINARY_LEVELS):
            return self._parse_unary()
        operators = _BINARY_LEVELS[level]
        node = self._parse_binary_level(level + 1)
        while (operator := self._match_operator(*operators)) is not None:
            right = self._parse_binary_level(level + 1)
            node = BinaryOp(operator, node, right)
        return node

    def _parse_unary(self) -> PluralNode:
        if self._peek().kind is TokenKind.NOT:
            self._advance()
            with self._guard:
                return Not(self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> PluralNode:
        token = self._peek()
        match token.kind:
            case TokenKind.NUMBER:
                self._advance()
                return NumberLiteral(int(token.text))
            case TokenKind.QUANTITY:
                self._advance()
                return Quantity()
            case TokenKind.LPAREN:
                self._advance()
                node = self._parse_expression()
                self._expect(TokenKind.RPAREN, "')'")
                return node
            case TokenKind.EOF:
                msg = "Unexpected end of expression"
                raise PluralParseError(msg, token.position)
            case _:
                msg = f"Unexpected {token.text!r}"
                raise PluralParseError(msg, token.position)


_BINARY_LEVELS: tuple[tuple[str, ...], ...] = (
    ("||",),
    ("&&",),
    ("==", "!="),
    ("<", "<=", ">", ">="),
    ("%",),
)
