from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedToken

from calc_errors import CalcSyntaxError, UnknownOperator
from calc_types import INT_MAX, Constant, Expression, Operation, Operator

# Prefix notation grammar. Whitespace is significant: any number of spaces may
# follow the operator, operands are separated by exactly one.
grammar = """
    ?start: expression
    ?expression: constant | operation
    constant: DIGITS
    operation: "(" OPERATOR _SPACE* operands ")"
    operands: (expression (_SPACE expression)*)?
    DIGITS: /[0-9]+/
    OPERATOR: "+" | "-" | "*" | "/"
    _SPACE: " "
"""

_DESCRIPTIONS = {
    "DIGITS": "a number",
    "LPAR": "'('",
    "RPAR": "')'",
    "OPERATOR": "an operator",
    "_SPACE": "' '",
    "$END": "end of input",
}

class _LiteralOutOfRange(Exception):
    def __init__(self, token):
        super().__init__(str(token))
        self.token = token

# Builds the expression tree while the parser reduces
class BuildExpression(Transformer):
    def constant(self, items):
        (digits,) = items
        significant = digits.lstrip("0") or "0"
        # length check first: int() refuses very long digit strings
        if len(significant) > len(str(INT_MAX)) or int(significant) > INT_MAX:
            raise _LiteralOutOfRange(digits)
        return Constant(int(significant))

    def operation(self, items):
        op, operands = items
        return Operation(Operator.from_token(str(op)), operands)

    def operands(self, items):
        return tuple(items)

parser = Lark(grammar, parser="lalr", lexer="contextual", transformer=BuildExpression())

def _stop(interactive, text: str, position: int) -> tuple[str, Expression]:
    """Finish at `position`: either a whole expression ends there, or the
    input is malformed at that point."""
    accepts = interactive.accepts()
    if "$END" in accepts:
        return text[position:], interactive.feed_eof()

    remainder = text[position:]
    if not remainder:
        raise CalcSyntaxError("unexpected end of input", remainder)
    if accepts == {"OPERATOR"}:
        raise UnknownOperator(remainder[0], remainder)
    expected = " or ".join(sorted(_DESCRIPTIONS.get(name, name) for name in accepts))
    raise CalcSyntaxError(f"expected {expected} at position {position}, found {remainder[0]!r}", remainder)

def _parse_prefix(interactive, text: str) -> tuple[str, Expression]:
    # A complete expression ends wherever the paren depth is back to zero
    depth = 0
    try:
        for token in interactive.iter_parse():
            if token.start_pos > 0 and depth == 0:
                return _stop(interactive, text, token.start_pos)
            if token.type not in interactive.choices():
                return _stop(interactive, text, token.start_pos)
            if token.type == "LPAR":
                depth += 1
            elif token.type == "RPAR":
                depth -= 1
    except (UnexpectedCharacters, UnexpectedToken) as e:
        return _stop(interactive, text, e.pos_in_stream)
    return _stop(interactive, text, len(text))

def parse(text: str) -> tuple[str, Expression]:
    """Parse the longest expression at the start of `text`.

    Returns the unconsumed rest of the text together with the expression
    tree. Nothing is skipped, so a line terminator stays in the rest.
    Raises CalcSyntaxError (or its UnknownOperator subclass) with the
    unparsed remainder when no complete expression can be read.
    """
    interactive = parser.parse_interactive(text)
    try:
        return _parse_prefix(interactive, text)
    except _LiteralOutOfRange as e:
        raise CalcSyntaxError(f"constant {e.token} is out of range", text[e.token.start_pos:]) from None
