"""Reserved constants that resolve without a variable binding."""

import math
from typing import Dict

from tally.tally_value import TallyFloat, TallyLiteral


CONSTANTS: Dict[str, TallyLiteral] = {
    'pi': TallyFloat(math.pi),
    'tau': TallyFloat(math.tau),
    'e': TallyFloat(math.e),
}


def lookup_constant(name: str) -> TallyLiteral | None:
    """Return the constant for a name (case-insensitive), or None."""
    return CONSTANTS.get(name.lower())


def is_reserved(name: str) -> bool:
    """Check if a name is taken by a constant."""
    return name.lower() in CONSTANTS
