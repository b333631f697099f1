"""Token types and token tree representation for Tally expressions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from tally.tally_function_name import TallyFunctionName


class TallyOperator(Enum):
    """Binary operators, lowest to highest precedence band."""
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULUS = "%"
    POWER = "^"

    @property
    def function_name(self) -> TallyFunctionName:
        """The function an operator applies."""
        return _OPERATOR_FUNCTIONS[self]

    @property
    def band(self) -> int:
        """Precedence band: 0 for + and -, 1 for *, / and %, 2 for ^."""
        if self in (TallyOperator.PLUS, TallyOperator.MINUS):
            return 0

        if self is TallyOperator.POWER:
            return 2

        return 1

    @classmethod
    def from_char(cls, char: str) -> 'TallyOperator | None':
        """Map a character to an operator, or None."""
        for op in cls:
            if op.value == char:
                return op

        return None

    def __str__(self) -> str:
        return self.value


_OPERATOR_FUNCTIONS = {
    TallyOperator.PLUS: TallyFunctionName.ADD,
    TallyOperator.MINUS: TallyFunctionName.SUBTRACT,
    TallyOperator.MULTIPLY: TallyFunctionName.MULTIPLY,
    TallyOperator.DIVIDE: TallyFunctionName.DIVIDE,
    TallyOperator.MODULUS: TallyFunctionName.MODULUS,
    TallyOperator.POWER: TallyFunctionName.POWER,
}


class TallyTokenType(Enum):
    """Token types for Tally expressions."""
    VARIABLE_DEF = "VARIABLE_DEF"
    NUMBER = "NUMBER"
    FUNCTION = "FUNCTION"
    VARIABLE_REF = "VARIABLE_REF"
    OPERATOR = "OPERATOR"
    GROUP = "GROUP"


@dataclass
class TallyToken:
    """
    Represents a single token in a Tally expression.

    The value depends on the type: a name for definitions, references and function
    calls, a TallyLiteral for numbers, and a TallyOperator for operators.  Function
    calls carry one child tree per argument; groups carry exactly one child tree.
    """
    type: TallyTokenType
    value: Any
    position: int
    length: int = 1
    children: List['TallyTokenTree'] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"TallyToken({self.type.name}, {self.value!r}, pos={self.position})"


@dataclass
class TallyTokenTree:
    """The tokens found at one nesting level, plus the number of operators among them."""
    tokens: List[TallyToken] = field(default_factory=list)
    num_operators: int = 0

    def append(self, token: TallyToken) -> None:
        """Add a token, keeping the operator count current."""
        self.tokens.append(token)
        if token.type == TallyTokenType.OPERATOR:
            self.num_operators += 1

    def is_empty(self) -> bool:
        """Check if this level holds no tokens."""
        return not self.tokens

    def __len__(self) -> int:
        return len(self.tokens)
