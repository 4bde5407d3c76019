"""Safe arithmetic evaluator for timestamp input.

Input is parsed with the CEL grammar and the resulting Lark tree is walked
by a whitelist interpreter. Only numeric literals, ``+ - * /``, unary minus
and parentheses are accepted. Nothing the user types is ever executed.
"""

from __future__ import annotations

import math

from celpy.celparser import CELParseError, CELParser
from lark import Token, Tree
from lark.exceptions import LarkError
from lark.visitors import Interpreter

from pydevutils._constants import DEFAULT_MAX_RECURSION_DEPTH, MAX_EXPRESSION_LENGTH
from pydevutils._errors import (
    ERR_MSG_INVALID_EXPRESSION,
    ERR_MSG_UNSUPPORTED_EXPRESSION,
    InvalidExpressionError,
    MaxDepthExceededError,
    MaxExpressionLengthExceededError,
    UnsupportedExpressionError,
)

_parser = CELParser()

# Single-child rules of the CEL precedence chain
_PASSTHROUGH_RULES = {
    "expr",
    "conditionalor",
    "conditionaland",
    "relation",
    "member",
    "primary",
}


class Evaluator(Interpreter):
    """Evaluates an arithmetic CEL parse tree to a float."""

    def __init__(self, max_depth: int = DEFAULT_MAX_RECURSION_DEPTH) -> None:
        self._max_depth = max_depth
        self._depth = 0

    def _visit_child(self, tree: Tree | Token) -> float:
        """Visit a child node, incrementing depth."""
        self._depth += 1
        try:
            if self._depth > self._max_depth:
                raise MaxDepthExceededError(
                    "maximum expression depth exceeded",
                    f"depth {self._depth} exceeds limit {self._max_depth}",
                )
            if not isinstance(tree, Tree):
                raise UnsupportedExpressionError(
                    ERR_MSG_UNSUPPORTED_EXPRESSION,
                    f"unexpected token {tree!r}",
                )
            return self.visit(tree)
        finally:
            self._depth -= 1

    def __default__(self, tree: Tree) -> float:
        if tree.data in _PASSTHROUGH_RULES and len(tree.children) == 1:
            return self._visit_child(tree.children[0])
        raise UnsupportedExpressionError(
            ERR_MSG_UNSUPPORTED_EXPRESSION,
            f"{tree.data} with {len(tree.children)} children is not arithmetic",
        )

    # ---- Arithmetic ----

    def addition(self, tree: Tree) -> float:
        children = tree.children
        if len(children) == 1:
            return self._visit_child(children[0])
        op_name, lhs, rhs = self._binary_parts(tree)
        if op_name == "addition_add":
            return lhs + rhs
        if op_name == "addition_sub":
            return lhs - rhs
        raise UnsupportedExpressionError(
            ERR_MSG_UNSUPPORTED_EXPRESSION,
            f"unknown addition operator: {op_name}",
        )

    def multiplication(self, tree: Tree) -> float:
        children = tree.children
        if len(children) == 1:
            return self._visit_child(children[0])
        op_name, lhs, rhs = self._binary_parts(tree)
        if op_name == "multiplication_mul":
            return lhs * rhs
        if op_name == "multiplication_div":
            if rhs == 0:
                raise InvalidExpressionError(
                    ERR_MSG_INVALID_EXPRESSION,
                    "division by zero",
                )
            return lhs / rhs
        raise UnsupportedExpressionError(
            ERR_MSG_UNSUPPORTED_EXPRESSION,
            f"unknown multiplication operator: {op_name}",
        )

    def _binary_parts(self, tree: Tree) -> tuple[str, float, float]:
        # children[0] is the operator prefix node wrapping the left operand
        if len(tree.children) != 2 or not isinstance(tree.children[0], Tree):
            raise UnsupportedExpressionError(
                ERR_MSG_UNSUPPORTED_EXPRESSION,
                f"{tree.data} has unexpected structure",
            )
        op_node, rhs = tree.children
        lhs = self._visit_child(op_node.children[0])
        return op_node.data, lhs, self._visit_child(rhs)

    def unary(self, tree: Tree) -> float:
        children = tree.children
        if len(children) == 1:
            return self._visit_child(children[0])
        if (
            len(children) == 2
            and isinstance(children[0], Tree)
            and children[0].data == "unary_neg"
        ):
            return -self._visit_child(children[1])
        raise UnsupportedExpressionError(
            ERR_MSG_UNSUPPORTED_EXPRESSION,
            "only unary minus is supported",
        )

    def paren_expr(self, tree: Tree) -> float:
        return self._visit_child(tree.children[0])

    # ---- Literals ----

    def literal(self, tree: Tree) -> float:
        token = tree.children[0]
        if not isinstance(token, Token) or token.type not in ("INT_LIT", "FLOAT_LIT"):
            raise UnsupportedExpressionError(
                ERR_MSG_UNSUPPORTED_EXPRESSION,
                f"unsupported literal: {token!r}",
            )
        try:
            # Decimal only: base 10 rejects CEL hex literals such as 0x10
            if token.type == "INT_LIT":
                return float(int(str(token), 10))
            return float(str(token))
        except (ValueError, OverflowError) as e:
            raise UnsupportedExpressionError(
                ERR_MSG_UNSUPPORTED_EXPRESSION,
                f"unsupported numeric literal: {token!s}",
                wrapped=e,
            ) from e


def evaluate_expression(
    text: str,
    *,
    max_depth: int = DEFAULT_MAX_RECURSION_DEPTH,
    max_length: int = MAX_EXPRESSION_LENGTH,
) -> float:
    """Evaluate an arithmetic expression such as ``60*60*24``.

    Raises:
        MaxExpressionLengthExceededError: If ``text`` is too long.
        InvalidExpressionError: On syntax errors, division by zero or a
            non-finite result.
        UnsupportedExpressionError: If anything other than arithmetic is used.
        MaxDepthExceededError: If nesting is too deep.
    """
    if len(text) > max_length:
        raise MaxExpressionLengthExceededError(
            "expression too long",
            f"expression length {len(text)} exceeds limit {max_length}",
        )
    if not text.strip():
        raise InvalidExpressionError(ERR_MSG_INVALID_EXPRESSION, "empty expression")

    try:
        tree = _parser.parse(text)
    except (CELParseError, LarkError) as e:
        raise InvalidExpressionError(
            ERR_MSG_INVALID_EXPRESSION,
            f"cannot parse {text!r}: {e}",
            wrapped=e,
        ) from e

    try:
        value = Evaluator(max_depth=max_depth).visit(tree)
    except RecursionError as e:
        raise MaxDepthExceededError(
            "maximum expression depth exceeded",
            f"python recursion limit hit evaluating {text!r}",
            wrapped=e,
        ) from e

    if not math.isfinite(value):
        raise InvalidExpressionError(
            ERR_MSG_INVALID_EXPRESSION,
            f"{text!r} evaluated to non-finite {value}",
        )
    return value
