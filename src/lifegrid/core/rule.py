"""Survival/birth rules for life-like cellular automata."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Tuple


@dataclass(frozen=True)
class Rule:
    """Neighbor counts that keep a live cell alive or birth a dead one.

    Counts outside 0-8 are accepted and simply never match.
    """

    surviving: FrozenSet[int]
    born: FrozenSet[int]

    def __init__(self, surviving: Iterable[int], born: Iterable[int]) -> None:
        """Initialize a rule.

        Args:
            surviving: Neighbor counts for which a live cell stays alive
            born: Neighbor counts for which a dead cell becomes alive
        """
        object.__setattr__(self, "surviving", frozenset(surviving))
        object.__setattr__(self, "born", frozenset(born))

    @classmethod
    def default(cls) -> "Rule":
        """Conway's rule: survive on 2 or 3, born on 3."""
        return cls({2, 3}, {3})

    @classmethod
    def named(cls, name: str) -> "Rule":
        """Look up a well-known rule by name.

        Raises:
            KeyError: If the name is not a known rule
        """
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        if key not in NAMED_RULES:
            raise KeyError(f"Unknown rule '{name}'")
        return cls.from_string(NAMED_RULES[key])

    @classmethod
    def from_string(cls, notation: str) -> "Rule":
        """Parse a rule from B/S notation.

        Accepts ``B3/S23``, ``S23/B3`` and the survive/born form ``23/3``.

        Args:
            notation: Rule string

        Returns:
            Parsed Rule

        Raises:
            ValueError: If the string is not a valid rule
        """
        parts = notation.strip().upper().split("/")
        if len(parts) != 2:
            raise ValueError(f"Invalid rule '{notation}': expected two parts separated by '/'")

        surviving = None
        born = None
        if parts[0][:1].isdigit() or parts[0] == "":
            # Legacy survive/born form
            if parts[1][:1] in ("B", "S"):
                raise ValueError(f"Invalid rule '{notation}': mixed notation")
            surviving = _parse_counts(parts[0], notation)
            born = _parse_counts(parts[1], notation)
        else:
            for part in parts:
                prefix, counts = part[:1], part[1:]
                if prefix == "B" and born is None:
                    born = _parse_counts(counts, notation)
                elif prefix == "S" and surviving is None:
                    surviving = _parse_counts(counts, notation)
                else:
                    raise ValueError(f"Invalid rule '{notation}': unexpected part '{part}'")

        return cls(surviving, born)

    def survives(self, count: int) -> bool:
        """Whether a live cell with ``count`` neighbors stays alive."""
        return count in self.surviving

    def is_born(self, count: int) -> bool:
        """Whether a dead cell with ``count`` neighbors becomes alive."""
        return count in self.born

    def __str__(self) -> str:
        born = "".join(str(n) for n in sorted(self.born))
        surviving = "".join(str(n) for n in sorted(self.surviving))
        return f"B{born}/S{surviving}"


def _parse_counts(digits: str, notation: str) -> Tuple[int, ...]:
    if not digits.isdigit() and digits != "":
        raise ValueError(f"Invalid rule '{notation}': neighbor counts must be digits")
    return tuple(int(d) for d in digits)


NAMED_RULES: Dict[str, str] = {
    "conway": "B3/S23",
    "highlife": "B36/S23",
    "seeds": "B2/S",
    "day_and_night": "B3678/S34678",
    "life_without_death": "B3/S012345678",
}
