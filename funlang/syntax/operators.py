"""Binary operators of the Fun language. There is no boolean type: comparisons and logical operators produce 1 or 0,
and any nonzero integer is truthy.

Division and modulo truncate toward zero, so the remainder always takes the sign of the dividend:

```
 7 /  2 ==  3     7 %  2 ==  1
-7 /  2 == -3    -7 %  2 == -1
 7 / -2 == -3     7 % -2 ==  1
```

Python's own // and % floor instead, hence the helpers below.
"""

from enum import Enum


def as_int(flag):
    """Returns 1 if flag else 0."""
    return 1 if flag else 0


def truncating_div(a, b):
    """Integer division rounding toward zero. Raises ZeroDivisionError if b == 0."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def truncating_mod(a, b):
    """Remainder matching truncating_div: a == b * truncating_div(a, b) + truncating_mod(a, b)."""
    return a - b * truncating_div(a, b)


class BinaryOperator(Enum):
    """Closed set of binary operators. Each value is (symbol, function of two ints)."""
    MUL = ("*", lambda a, b: a * b)
    DIV = ("/", truncating_div)
    MOD = ("%", truncating_mod)
    PLUS = ("+", lambda a, b: a + b)
    MINUS = ("-", lambda a, b: a - b)
    LESS_THAN = ("<", lambda a, b: as_int(a < b))
    GREATER_THAN = (">", lambda a, b: as_int(a > b))
    LE = ("<=", lambda a, b: as_int(a <= b))
    GE = (">=", lambda a, b: as_int(a >= b))
    EQ = ("==", lambda a, b: as_int(a == b))
    NEQ = ("!=", lambda a, b: as_int(a != b))
    AND = ("&&", lambda a, b: as_int(a != 0 and b != 0))
    OR = ("||", lambda a, b: as_int(a != 0 or b != 0))

    def __init__(self, symbol, func):
        self.symbol = symbol
        self.func = func

    def apply(self, a, b):
        """Applies this operator to two already-evaluated operands."""
        return self.func(a, b)

    @classmethod
    def from_symbol(cls, symbol):
        """Returns the operator spelled symbol. Raises ValueError for unknown symbols."""
        for operator in cls:
            if operator.symbol == symbol:
                return operator
        raise ValueError(f"unknown operator: '{symbol}'")

    def __str__(self):
        return self.symbol
