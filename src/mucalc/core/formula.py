"""Chemical formula parsing.

Formulas are plain element/count sequences such as ``"Ru2O3"`` or ``"BN"``.
Parsing is done by a small finite-state tokenizer with three states:

* *symbol start*      – an uppercase letter must begin the next symbol
* *lowercase or digit* – a symbol letter was read; a lowercase letter may
  extend it to two characters, digits start the count
* *digit*             – only further digits, or the start of a new symbol

Parenthesised groups and hydrate dots are not supported.
"""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass

from mucalc.core.elements import Element, ElementTable, get_element_table
from mucalc.errors import InvalidFormula


class _State(enum.Enum):
    SYMBOL_START = "symbol start"
    LOWER_OR_DIGIT = "lowercase or digit"
    DIGIT = "digit"


@dataclass(frozen=True)
class ParsedFormula:
    """Ordered ``(Element, count)`` pairs of a compound.

    Attributes:
        components: One entry per distinct element, in order of first appearance.
        source: The formula text that was parsed.
    """

    components: tuple[tuple[Element, int], ...]
    source: str = ""

    def __str__(self) -> str:
        return "".join(
            elem.symbol if count == 1 else f"{elem.symbol}{count}"
            for elem, count in self.components
        )

    def __len__(self) -> int:
        return len(self.components)

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(elem.symbol for elem, _ in self.components)

    @property
    def counts(self) -> dict[str, int]:
        return {elem.symbol: count for elem, count in self.components}

    @property
    def molar_mass(self) -> float:
        """Σ count × atomic weight (g/mol)."""
        return sum(count * elem.atomic_weight for elem, count in self.components)

    @property
    def mass_fractions(self) -> tuple[tuple[Element, float], ...]:
        """Weight fraction of each constituent; the fractions sum to 1."""
        total = self.molar_mass
        return tuple(
            (elem, count * elem.atomic_weight / total) for elem, count in self.components
        )


def parse_formula(formula: str, table: ElementTable | None = None) -> ParsedFormula:
    """Parse *formula* into a :class:`ParsedFormula`.

    Args:
        formula: Formula text, e.g. ``"Ru2O3"``.  Surrounding whitespace is
            ignored; any other character that is not an ASCII letter or digit
            is rejected.
        table: Element table to resolve symbols against (defaults to the
            process-wide table).

    Returns:
        The parsed formula.  Repeated symbols are merged into the first entry
        with their counts summed.

    Raises:
        InvalidFormula: If the text is empty, malformed, names an unknown
            element, or has a zero count.
    """
    if table is None:
        table = get_element_table()
    text = str(formula).strip() if formula is not None else ""
    if not text:
        raise InvalidFormula("Formula is empty")

    counts: dict[str, int] = {}

    def emit(symbol: str, digits: str) -> None:
        if symbol not in table:
            raise InvalidFormula(f"Unknown element {symbol!r} in formula {text!r}")
        count = int(digits) if digits else 1
        if count <= 0:
            raise InvalidFormula(f"Count for {symbol} must be positive in formula {text!r}")
        counts[symbol] = counts.get(symbol, 0) + count

    state = _State.SYMBOL_START
    symbol = ""
    digits = ""
    for pos, ch in enumerate(text):
        if state is _State.SYMBOL_START:
            if ch not in string.ascii_uppercase:
                raise InvalidFormula(f"Expected element symbol at position {pos} in {text!r}, got {ch!r}")
            symbol, digits = ch, ""
            state = _State.LOWER_OR_DIGIT
        elif ch in string.digits:
            digits += ch
            state = _State.DIGIT
        elif ch in string.ascii_uppercase:
            emit(symbol, digits)
            symbol, digits = ch, ""
            state = _State.LOWER_OR_DIGIT
        elif state is _State.LOWER_OR_DIGIT and ch in string.ascii_lowercase:
            if symbol + ch not in table:
                raise InvalidFormula(f"Unknown element {symbol + ch!r} in formula {text!r}")
            symbol += ch
            state = _State.DIGIT
        else:
            raise InvalidFormula(f"Unexpected {ch!r} at position {pos} in {text!r}")

    emit(symbol, digits)

    return ParsedFormula(
        components=tuple((table.lookup(sym), n) for sym, n in counts.items()),
        source=text,
    )
