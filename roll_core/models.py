"""Dataclasses describing scored items and the roll evidence gathered for them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from .rounding import RoundingMode


@dataclass(frozen=True)
class AttributeObservation:
    """One substat on an item: its kind and the accumulated amount shown."""

    kind: str
    amount: object


@dataclass
class ScoredItem:
    """An item whose substats are explained roll by roll."""

    substats: list[AttributeObservation]
    name: Optional[str] = None
    slot: Optional[str] = None
    level: Optional[int] = None
    main_stat: Optional[str] = None
    main_stat_amount: object = None


@dataclass
class AttributeEvidence:
    """Roll combinations and weight collected for a single substat."""

    kind: str
    amount: object
    weight: Optional[float]
    rounding_mode: Optional[RoundingMode]
    combinations: list[tuple[float, ...]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def roll_counts(self) -> list[int]:
        """Distinct numbers of rolls that can explain the amount, ascending."""

        return sorted({len(combo) for combo in self.combinations})

    @property
    def min_rolls(self) -> Optional[int]:
        counts = self.roll_counts
        return counts[0] if counts else None

    @property
    def max_rolls(self) -> Optional[int]:
        counts = self.roll_counts
        return counts[-1] if counts else None


@dataclass
class RollEstimate:
    """Per-substat evidence for one item, in the item's substat order."""

    item: ScoredItem
    evidence: list[AttributeEvidence]

    @property
    def failed(self) -> list[AttributeEvidence]:
        return [entry for entry in self.evidence if not entry.ok]

    @property
    def total_roll_range(self) -> Optional[tuple[int, int]]:
        """Fewest and most rolls the successful substats could add up to.

        Returns ``None`` when a successfully evaluated substat has no
        combination at all, since no total is consistent with it.
        """

        low = high = 0
        for entry in self.evidence:
            if not entry.ok:
                continue
            if entry.min_rolls is None or entry.max_rolls is None:
                return None
            low += entry.min_rolls
            high += entry.max_rolls
        return low, high


def _optional_int(value: object) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(str(value))
    except ValueError:
        return None


def item_from_mapping(raw: Mapping[str, object]) -> ScoredItem:
    """Build a ``ScoredItem`` from the JSON shape stored by the item collection.

    Expected keys are ``substats`` (a list of ``{"stat", "amount"}`` objects)
    and optionally ``name``, ``slot``, ``level``, ``mainStat`` and
    ``mainStatAmount``. Amounts are kept as given and coerced at search time.

    Raises
    ------
    ValueError
        If ``substats`` is missing or an entry lacks a ``stat`` name.
    """

    raw_substats = raw.get("substats")
    if not isinstance(raw_substats, list):
        raise ValueError("Item must contain a 'substats' list.")

    substats: list[AttributeObservation] = []
    for index, entry in enumerate(raw_substats):
        if not isinstance(entry, Mapping) or not isinstance(entry.get("stat"), str):
            raise ValueError(f"Substat #{index + 1} must be an object with a 'stat' name.")
        substats.append(AttributeObservation(kind=entry["stat"], amount=entry.get("amount")))

    name = raw.get("name")
    slot = raw.get("slot")
    main_stat = raw.get("mainStat")
    return ScoredItem(
        substats=substats,
        name=name if isinstance(name, str) else None,
        slot=slot if isinstance(slot, str) else None,
        level=_optional_int(raw.get("level")),
        main_stat=main_stat if isinstance(main_stat, str) else None,
        main_stat_amount=raw.get("mainStatAmount"),
    )
