class CalcError(Exception):
    pass

class CalcSyntaxError(CalcError):
    remainder: str

    def __init__(self, message: str, remainder: str):
        super().__init__(message)
        self.remainder = remainder

class UnknownOperator(CalcSyntaxError):
    token: str

    def __init__(self, token: str, remainder: str = ""):
        super().__init__(f"unknown operator {token!r}", remainder)
        self.token = token

class TrailingContent(CalcError):
    remainder: str

    def __init__(self, remainder: str):
        super().__init__(f"unexpected input after expression: {remainder!r}")
        self.remainder = remainder

class EvaluationError(CalcError):
    pass

class EmptyOperandList(EvaluationError):
    pass

class DivisionByZero(EvaluationError):
    pass

class ArithmeticOverflow(EvaluationError):
    pass
