from dataclasses import dataclass
from typing import Iterator, Optional

from calc_errors import ArithmeticOverflow, DivisionByZero, EmptyOperandList
from calc_types import INT_MAX, INT_MIN, Constant, Expression, Operation, Operator

def _divide(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero(f"division by zero in {a} / {b}")
    # Python's // floors; the calculator truncates toward zero
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient

def apply(op: Operator, a: int, b: int) -> int:
    match op:
        case Operator.ADD:
            result = a + b
        case Operator.SUBTRACT:
            result = a - b
        case Operator.MULTIPLY:
            result = a * b
        case Operator.DIVIDE:
            result = _divide(a, b)
    if not INT_MIN <= result <= INT_MAX:
        raise ArithmeticOverflow(f"{a} {op} {b} does not fit in 32 bits")
    return result

@dataclass
class _Fold:
    op: Operator
    operands: Iterator[Expression]
    accumulator: Optional[int] = None

    def push(self, value: int) -> None:
        if self.accumulator is None:
            self.accumulator = value
        else:
            self.accumulator = apply(self.op, self.accumulator, value)

def _open(expr: Operation) -> tuple[_Fold, Expression]:
    if not expr.operands:
        raise EmptyOperandList(f"'{expr.op}' needs at least one operand")
    operands = iter(expr.operands)
    return _Fold(expr.op, operands), next(operands)

def evaluate(expr: Expression) -> int:
    """Evaluate an expression tree to a 32-bit integer.

    An operation folds its operands left to right, so (- 10 3 2) is
    (10 - 3) - 2 and a single operand is returned unchanged. Nesting is
    walked with an explicit stack of folds, so depth is not limited by
    the interpreter's recursion limit.
    """
    folds: list[_Fold] = []
    while True:
        while isinstance(expr, Operation):
            fold, expr = _open(expr)
            folds.append(fold)
        if not isinstance(expr, Constant):
            raise TypeError(f"not an expression: {expr!r}")

        value = expr.value
        while folds:
            folds[-1].push(value)
            expr = next(folds[-1].operands, None)
            if expr is not None:
                break
            value = folds.pop().accumulator
        else:
            return value
