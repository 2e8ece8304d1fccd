"""Arithmetic intent backed by a small recursive-descent expression parser.

Expressions are tokenised and parsed into a fixed AST; evaluation only ever
touches numbers, the operators below and the whitelisted function table, so
no input can reach arbitrary code.

Grammar::

    expr     := term (("+" | "-") term)*
    term     := unary (("*" | "/" | "%") unary)*
    unary    := ("-" | "+") unary | power
    power    := postfix ("^" unary)?
    postfix  := primary ("%" ["of" unary])*
    primary  := NUMBER | CONSTANT | FUNCTION "(" [expr ("," expr)*] ")" | "(" expr ")"

A ``%`` directly followed by an operand is modulo; otherwise it is a percent.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Union

from ..services import PaletteServices
from ..types import Action
from .base import IntentMatcher, smart_action


class CalculationError(ValueError):
    """Raised when an expression cannot be tokenised, parsed or evaluated."""


# ---------------------------------------------------------------------- Tokens


@dataclass(frozen=True, slots=True)
class Token:
    kind: str  # "number", "name", "op", "lparen", "rparen", "comma"
    text: str
    value: float = 0.0


_NUMBER = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_OPERATORS = {"+": "+", "-": "-", "*": "*", "/": "/", "^": "^", "%": "%", "×": "*", "÷": "/"}


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    index = 0
    while index < len(source):
        char = source[index]
        if char.isspace():
            index += 1
            continue
        number = _NUMBER.match(source, index)
        if number:
            text = number.group(0)
            # legacy octal style literals such as "01" are not numbers
            if len(text) > 1 and text[0] == "0" and text[1].isdigit():
                raise CalculationError(f"invalid number literal {text!r}")
            tokens.append(Token("number", text, float(text)))
            index = number.end()
            continue
        name = _NAME.match(source, index)
        if name:
            tokens.append(Token("name", name.group(0).lower()))
            index = name.end()
            continue
        if char in _OPERATORS:
            tokens.append(Token("op", _OPERATORS[char]))
        elif char == "(":
            tokens.append(Token("lparen", char))
        elif char == ")":
            tokens.append(Token("rparen", char))
        elif char == ",":
            tokens.append(Token("comma", char))
        else:
            raise CalculationError(f"unexpected character {char!r}")
        index += 1
    return tokens


# ------------------------------------------------------------------------- AST


@dataclass(frozen=True, slots=True)
class Number:
    value: float


@dataclass(frozen=True, slots=True)
class Unary:
    op: str
    operand: "Node"


@dataclass(frozen=True, slots=True)
class Binary:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True, slots=True)
class Percent:
    operand: "Node"
    of: "Node | None" = None


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: tuple["Node", ...]


Node = Union[Number, Unary, Binary, Percent, Call]


def _js_round(value: float) -> float:
    return float(math.floor(value + 0.5))


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return value


@dataclass(frozen=True, slots=True)
class _Function:
    impl: Callable[..., float]
    min_args: int
    max_args: int | None


FUNCTIONS: dict[str, _Function] = {
    "sqrt": _Function(math.sqrt, 1, 1),
    "cbrt": _Function(lambda x: math.copysign(abs(x) ** (1 / 3), x), 1, 1),
    "sin": _Function(math.sin, 1, 1),
    "cos": _Function(math.cos, 1, 1),
    "tan": _Function(math.tan, 1, 1),
    "asin": _Function(math.asin, 1, 1),
    "acos": _Function(math.acos, 1, 1),
    "atan": _Function(math.atan, 1, 1),
    "abs": _Function(abs, 1, 1),
    "ceil": _Function(lambda x: float(math.ceil(x)), 1, 1),
    "floor": _Function(lambda x: float(math.floor(x)), 1, 1),
    "round": _Function(_js_round, 1, 1),
    "trunc": _Function(lambda x: float(math.trunc(x)), 1, 1),
    "sign": _Function(_sign, 1, 1),
    "exp": _Function(math.exp, 1, 1),
    "log2": _Function(math.log2, 1, 1),
    "log10": _Function(math.log10, 1, 1),
    "log": _Function(math.log10, 1, 1),
    "ln": _Function(math.log, 1, 1),
    "pow": _Function(math.pow, 2, 2),
    "min": _Function(min, 1, None),
    "max": _Function(max, 1, None),
    "hypot": _Function(math.hypot, 1, None),
}

CONSTANTS: dict[str, float] = {"pi": math.pi, "tau": math.tau}


# ---------------------------------------------------------------------- Parser


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> Node:
        if not self._tokens:
            raise CalculationError("empty expression")
        node = self._expr()
        trailing = self._peek()
        if trailing is not None:
            raise CalculationError(f"unexpected token {trailing.text!r}")
        return node

    # helpers ---------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        index = self._pos + offset
        return self._tokens[index] if index < len(self._tokens) else None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise CalculationError("unexpected end of expression")
        self._pos += 1
        return token

    def _at_op(self, *ops: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "op" and token.text in ops

    def _at_kind(self, kind: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == kind

    def _starts_operand(self, token: Token | None) -> bool:
        if token is None:
            return False
        if token.kind in {"number", "lparen"}:
            return True
        return token.kind == "name" and token.text != "of"

    # grammar ---------------------------------------------------------------

    def _expr(self) -> Node:
        node = self._term()
        while self._at_op("+", "-"):
            op = self._advance().text
            node = Binary(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._at_op("*", "/", "%"):
            op = self._advance().text
            node = Binary(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self._at_op("-", "+"):
            op = self._advance().text
            return Unary(op, self._unary())
        return self._power()

    def _power(self) -> Node:
        base = self._postfix()
        if self._at_op("^"):
            self._advance()
            return Binary("^", base, self._unary())
        return base

    def _postfix(self) -> Node:
        node = self._primary()
        while self._at_op("%"):
            following = self._peek(1)
            if following is not None and following.kind == "name" and following.text == "of":
                self._pos += 2
                node = Percent(node, self._unary())
            elif self._starts_operand(following):
                break  # modulo, handled by _term
            else:
                self._advance()
                node = Percent(node)
        return node

    def _primary(self) -> Node:
        token = self._advance()
        if token.kind == "number":
            return Number(token.value)
        if token.kind == "lparen":
            node = self._expr()
            self._expect("rparen")
            return node
        if token.kind == "name":
            if token.text in CONSTANTS:
                return Number(CONSTANTS[token.text])
            if token.text in FUNCTIONS:
                return self._call(token.text)
            raise CalculationError(f"unknown identifier {token.text!r}")
        raise CalculationError(f"unexpected token {token.text!r}")

    def _call(self, name: str) -> Node:
        self._expect("lparen")
        args: list[Node] = []
        if not self._at_kind("rparen"):
            args.append(self._expr())
            while self._at_kind("comma"):
                self._advance()
                args.append(self._expr())
        self._expect("rparen")
        function = FUNCTIONS[name]
        if len(args) < function.min_args or (function.max_args is not None and len(args) > function.max_args):
            raise CalculationError(f"wrong number of arguments for {name}()")
        return Call(name, tuple(args))

    def _expect(self, kind: str) -> Token:
        token = self._advance()
        if token.kind != kind:
            raise CalculationError(f"expected {kind}, found {token.text!r}")
        return token


def parse(source: str) -> Node:
    return _Parser(tokenize(source)).parse()


# ------------------------------------------------------------------- Evaluator


def evaluate(node: Node) -> float:
    match node:
        case Number(value=value):
            return value
        case Unary(op="-", operand=operand):
            return -evaluate(operand)
        case Unary(operand=operand):
            return evaluate(operand)
        case Percent(operand=operand, of=None):
            return evaluate(operand) / 100
        case Percent(operand=operand, of=whole):
            return evaluate(operand) / 100 * evaluate(whole)
        case Binary(op=op, left=left, right=right):
            return _apply(op, evaluate(left), evaluate(right))
        case Call(name=name, args=args):
            return float(FUNCTIONS[name].impl(*(evaluate(arg) for arg in args)))
    raise CalculationError(f"cannot evaluate {node!r}")


def _apply(op: str, left: float, right: float) -> float:
    match op:
        case "+":
            return left + right
        case "-":
            return left - right
        case "*":
            return left * right
        case "/":
            return left / right
        case "%":
            return math.fmod(left, right)
        case "^":
            return math.pow(left, right)
    raise CalculationError(f"unknown operator {op!r}")


def safe_calculate(expression: str) -> float | None:
    """Evaluate ``expression``; ``None`` unless the result is a finite number."""

    try:
        value = evaluate(parse(expression.strip()))
    except (ArithmeticError, ValueError, TypeError):
        return None
    if not math.isfinite(value):
        return None
    return value


# ----------------------------------------------------------------- Formatting


def _is_integral(value: float) -> bool:
    return float(value).is_integer()


def format_number(value: float) -> str:
    """Human-friendly rendering with thousands separators."""

    if _is_integral(value) and abs(value) < 1e15:
        return f"{int(value):,}"
    rounded = float(f"{value:.15g}")
    if 1e-10 < abs(rounded) < 1e15:
        text = f"{rounded:,.10f}".rstrip("0").rstrip(".")
        return text if text not in {"", "-", "-0"} else "0"
    return f"{value:.6e}"


def raw_number(value: float) -> str:
    """Plain numeric text copied to the clipboard."""

    if _is_integral(value):
        return str(int(value))
    return f"{value:.15g}"


# -------------------------------------------------------------------- Matcher


_EQUALS_FORM = re.compile(r"^=\s*(.+)", re.DOTALL)
_CALC_FORM = re.compile(r"^calc(?:ulate)?\s+(.+)", re.IGNORECASE | re.DOTALL)
_BARE_START = re.compile(r"^[\d(.]")
_HAS_OPERATOR = re.compile(r"[+\-*/^%×÷]")
_HAS_DIGIT = re.compile(r"\d")
_PLAIN_NUMBER = re.compile(r"^\d+$")
_LEADING_NAME = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*(\(?)")


def _bare_expression(query: str) -> str | None:
    if _BARE_START.match(query):
        if not (_HAS_OPERATOR.search(query) and _HAS_DIGIT.search(query)):
            return None
        if _PLAIN_NUMBER.match(re.sub(r"[\s,]", "", query)):
            return None
        return query
    leading = _LEADING_NAME.match(query)
    if leading is None:
        return None
    name = leading.group(1).lower()
    if name in FUNCTIONS and leading.group(2):
        return query
    if name in CONSTANTS and _HAS_OPERATOR.search(query):
        return query
    return None


class CalculationMatcher(IntentMatcher):
    name = "calculation"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.strip()
        expression: str | None = None
        if equals := _EQUALS_FORM.match(text):
            expression = equals.group(1)
        elif calc := _CALC_FORM.match(text):
            expression = calc.group(1)
        else:
            expression = _bare_expression(text)
        if not expression:
            return None

        value = safe_calculate(expression)
        if value is None:
            return None

        raw = raw_number(value)
        return [
            smart_action(
                "smart-calc",
                f"= {format_number(value)}",
                f"{expression.strip()} = {raw}",
                "Calculator",
                result=raw,
                services=services,
            )
        ]


__all__ = [
    "CONSTANTS",
    "FUNCTIONS",
    "CalculationError",
    "CalculationMatcher",
    "evaluate",
    "format_number",
    "parse",
    "raw_number",
    "safe_calculate",
    "tokenize",
]
