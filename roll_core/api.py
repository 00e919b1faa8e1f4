"""High-level entry points used by the UI and callers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Optional

import numpy as np
import pandas as pd

from .combinations import find_combinations
from .config import RollConfig, resolve_config
from .data import MAX_ROLLS, SUBSTAT_LABELS
from .estimator import AttributeRollEstimator
from .models import AttributeEvidence, RollEstimate, ScoredItem, item_from_mapping

EVIDENCE_COLUMNS = [
    "stat",
    "label",
    "amount",
    "weight",
    "rounding",
    "combinations",
    "min_rolls",
    "max_rolls",
    "error",
]


def find_combos(
    candidate_values: Sequence[float],
    target_value: object,
    attribute_kind: str,
    config: Optional[RollConfig] = None,
) -> list[tuple[float, ...]]:
    """Return the roll combinations that explain ``target_value``.

    Parameters
    ----------
    candidate_values:
        Legal roll values to search over.
    target_value:
        Observed substat amount, numeric or a numeric string.
    attribute_kind:
        Substat kind, used only to pick the rounding mode.
    config:
        Lookup tables; defaults to ``ROLL_CONFIG_PATH`` or the bundled tables.

    Raises
    ------
    UnknownAttributeKindError
        If ``attribute_kind`` has no rounding mode configured.
    InvalidTargetError
        If ``target_value`` is not numeric.
    """

    mode = resolve_config(config).rounding_mode_for(attribute_kind)
    return find_combinations(candidate_values, target_value, mode)


def estimate_rolls(
    item: ScoredItem | Mapping[str, object],
    config: Optional[RollConfig] = None,
) -> RollEstimate:
    """Collect weight and roll combinations for every substat of ``item``.

    ``item`` may be a ``ScoredItem`` or the stored JSON shape accepted by
    ``item_from_mapping``.
    """

    scored = item if isinstance(item, ScoredItem) else item_from_mapping(item)
    return AttributeRollEstimator(resolve_config(config)).estimate(scored)


def format_combination(combo: Sequence[float]) -> str:
    """Render a combination as ``"3.11 + 3.89"``."""

    return " + ".join(f"{Decimal(str(value)).normalize():f}" for value in combo)


def roll_count_histogram(evidence: AttributeEvidence, max_rolls: int = MAX_ROLLS) -> np.ndarray:
    """Count combinations by number of rolls, indexed ``0..max_rolls``."""

    lengths = np.array([len(combo) for combo in evidence.combinations], dtype=np.int64)
    return np.bincount(lengths, minlength=max_rolls + 1)[: max_rolls + 1]


def evidence_frame(estimate: RollEstimate) -> pd.DataFrame:
    """Tabulate an estimate with one row per substat."""

    rows = []
    for entry in estimate.evidence:
        rows.append(
            {
                "stat": entry.kind,
                "label": SUBSTAT_LABELS.get(entry.kind, entry.kind),
                "amount": entry.amount,
                "weight": entry.weight,
                "rounding": entry.rounding_mode.value if entry.rounding_mode else None,
                "combinations": len(entry.combinations),
                "min_rolls": entry.min_rolls,
                "max_rolls": entry.max_rolls,
                "error": entry.error,
            }
        )
    return pd.DataFrame(rows, columns=EVIDENCE_COLUMNS)
