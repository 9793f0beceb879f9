"""Static duration estimator — how long a flow runs, without running it.

Parses a scene module's source with ``ast`` and walks the body of its
``flow`` function, applying the same timing rules the combinators in
flow.py follow at runtime:

    yield from all_of(a, b, ...)   max of the children
    yield from chain(a, b, ...)    sum of the children
    yield from wait_for(n)         n if n is a numeric literal, else 0
    yield from delay(n, task)      n + estimate(task)
    yield from x.text(s, n)        n if n is a numeric literal, else 0
    yield from anything(..., n)    the last numeric-literal argument

``for _ in range(...)`` multiplies its body by the iteration count when
the bounds are literals (1 otherwise). ``if`` takes the longer branch.
Only delegated calls (``yield from``) take time; a bare call creates a
generator that never runs.

The "last numeric literal is the duration" rule is a convention of the
animation call signatures, not something the estimator can verify: a call
whose trailing literal means something else is misjudged.

If the first statement is a transition (fade/slide/zoom) it is also
reported as the scene's leading transition; its time still counts toward
the total.

Parse failures, a missing flow function or any error during the walk give
FALLBACK_DURATION instead of raising, so one broken scene never stops a
project timeline from being laid out.
"""

import ast
import logging
from dataclasses import dataclass

from .flow import TRANSITION_TYPES

logger = logging.getLogger(__name__)

FALLBACK_DURATION = 10.0

PARALLEL_CALLS = {"all_of", "all"}
SEQUENCE_CALLS = {"chain"}
WAIT_CALLS = {"wait_for", "waitFor"}
DELAY_CALLS = {"delay"}
CONTENT_CALLS = {"text"}


@dataclass(frozen=True)
class Transition:
    type: str
    duration: float


@dataclass(frozen=True)
class DurationEstimate:
    duration: float
    transition: Transition | None = None


# ── Literal helpers ───────────────────────────────────────────────


def _literal_number(node: ast.AST | None) -> float | None:
    """Value of an int/float literal (optionally negated), else None."""
    if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
        inner = _literal_number(node.operand)
        if inner is None:
            return None
        return -inner if isinstance(node.op, ast.USub) else inner
    if isinstance(node, ast.Constant) and not isinstance(node.value, bool):
        if isinstance(node.value, (int, float)):
            return float(node.value)
    return None


def _duration(node: ast.AST | None) -> float:
    value = _literal_number(node)
    return max(value, 0.0) if value is not None else 0.0


def _call_name(call: ast.Call) -> str | None:
    if isinstance(call.func, ast.Name):
        return call.func.id
    if isinstance(call.func, ast.Attribute):
        return call.func.attr
    return None


# ── Estimator ────────────────────────────────────────────────────


class FlowEstimator:
    """Walks flow statements and sums their worst-case durations."""

    def block(self, statements: list[ast.stmt]) -> float:
        return sum(self.statement(s) for s in statements)

    def statement(self, node: ast.stmt) -> float:
        if isinstance(node, ast.Expr):
            return self.expression(node.value)
        if isinstance(node, (ast.Assign, ast.AnnAssign, ast.AugAssign)):
            return self.expression(node.value) if node.value is not None else 0.0
        if isinstance(node, ast.For):
            return self.iterations(node.iter) * self.block(node.body) + self.block(node.orelse)
        if isinstance(node, ast.While):
            return self.block(node.body) + self.block(node.orelse)
        if isinstance(node, ast.If):
            return max(self.block(node.body), self.block(node.orelse))
        if isinstance(node, ast.With):
            return self.block(node.body)
        if isinstance(node, ast.Try):
            return self.block(node.body) + self.block(node.orelse) + self.block(node.finalbody)
        return 0.0

    def expression(self, node: ast.expr) -> float:
        if isinstance(node, ast.YieldFrom):
            return self.call(node.value)
        return 0.0

    def call(self, node: ast.expr) -> float:
        """Duration of one task expression."""
        if not isinstance(node, ast.Call):
            return 0.0
        name = _call_name(node)
        args = [a for a in node.args if not isinstance(a, ast.Starred)]

        if name in PARALLEL_CALLS:
            return max((self.call(a) for a in args), default=0.0)
        if name in SEQUENCE_CALLS:
            return sum(self.call(a) for a in args)
        if name in WAIT_CALLS:
            return _duration(args[0]) if args else 0.0
        if name in DELAY_CALLS:
            if not args:
                return 0.0
            inner = self.call(args[1]) if len(args) > 1 else 0.0
            return _duration(args[0]) + inner
        if name in CONTENT_CALLS and isinstance(node.func, ast.Attribute):
            return _duration(args[1]) if len(args) > 1 else 0.0

        # Convention: the trailing numeric literal is the duration.
        for arg in reversed(args):
            value = _literal_number(arg)
            if value is not None:
                return max(value, 0.0)
        return 0.0

    def iterations(self, node: ast.expr) -> int:
        """Iteration count of a loop over range(...) or a literal sequence."""
        if isinstance(node, (ast.List, ast.Tuple)):
            return len(node.elts)
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "range"
            and not node.keywords
            and 1 <= len(node.args) <= 3
        ):
            bounds = [_literal_number(a) for a in node.args]
            if all(b is not None and b == int(b) for b in bounds):
                try:
                    return len(range(*(int(b) for b in bounds)))
                except ValueError:
                    return 1
        return 1


def leading_transition(statements: list[ast.stmt]) -> Transition | None:
    """The transition a flow opens with, if its first statement is one."""
    body = _skip_docstring(statements)
    if not body:
        return None
    first = body[0]
    if not (isinstance(first, ast.Expr) and isinstance(first.value, ast.YieldFrom)):
        return None
    call = first.value.value
    if not isinstance(call, ast.Call) or not isinstance(call.func, ast.Name):
        return None
    if call.func.id not in TRANSITION_TYPES:
        return None
    return Transition(call.func.id, FlowEstimator().call(call))


def _skip_docstring(statements: list[ast.stmt]) -> list[ast.stmt]:
    if (
        statements
        and isinstance(statements[0], ast.Expr)
        and isinstance(statements[0].value, ast.Constant)
        and isinstance(statements[0].value.value, str)
    ):
        return statements[1:]
    return statements


def find_flow(tree: ast.Module, name: str = "flow") -> ast.FunctionDef | None:
    """Top-level function called name, falling back to any nested one."""
    for node in tree.body:
        if isinstance(node, ast.FunctionDef) and node.name == name:
            return node
    for node in ast.walk(tree):
        if isinstance(node, ast.FunctionDef) and node.name == name:
            return node
    return None


def estimate(
    source: str,
    flow_name: str = "flow",
    fallback: float = FALLBACK_DURATION,
) -> DurationEstimate:
    """Estimate a flow's duration and leading transition from its source."""
    try:
        tree = ast.parse(source)
    except (SyntaxError, ValueError, MemoryError, RecursionError) as e:
        # Pathologically nested source exhausts the parser instead of
        # raising SyntaxError.
        logger.warning("Could not parse flow source (%s), using %ss", e, fallback)
        return DurationEstimate(fallback)

    flow = find_flow(tree, flow_name)
    if flow is None:
        logger.warning("No '%s' function found, using %ss", flow_name, fallback)
        return DurationEstimate(fallback)

    try:
        duration = FlowEstimator().block(flow.body)
        transition = leading_transition(flow.body)
    except Exception:
        logger.warning("Duration estimate failed, using %ss", fallback, exc_info=True)
        return DurationEstimate(fallback)

    return DurationEstimate(duration, transition)
