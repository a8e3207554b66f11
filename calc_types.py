from dataclasses import dataclass
from enum import Enum

from calc_errors import UnknownOperator

INT_MIN = -2**31
INT_MAX = 2**31 - 1

class Operator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @classmethod
    def from_token(cls, token: str) -> "Operator":
        try:
            return cls(token)
        except ValueError:
            raise UnknownOperator(token, token) from None

    def __str__(self):
        return self.value

@dataclass(frozen=True)
class Constant:
    value: int

    def __str__(self):
        return str(self.value)

    def __deepcopy__(self, memo):
        return self

@dataclass(frozen=True)
class Operation:
    op: Operator
    operands: tuple["Expression", ...] = ()

    def __str__(self):
        parts = []
        pending = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, Operation):
                pending.append(")")
                for operand in reversed(item.operands):
                    pending.append(operand)
                    pending.append(" ")
                pending.append(f"({item.op}")
            else:
                parts.append(str(item))
        return "".join(parts)

    # Immutable, so copies share the tree
    def __deepcopy__(self, memo):
        return self

Expression = Constant | Operation
