"""Core roll reconstruction utilities for artifact substats."""

from .api import (
    estimate_rolls,
    evidence_frame,
    find_combos,
    format_combination,
    roll_count_histogram,
)
from .combinations import find_combinations
from .config import (
    RollConfig,
    clear_config_cache,
    default_roll_config,
    load_roll_config,
    roll_config_from_mapping,
)
from .data import (
    DECIMAL_STATS,
    MAX_ROLLS,
    POSSIBLE_SUBSTAT_ROLLS,
    SAMPLE_ARTIFACT,
    SUBSTAT_LABELS,
    SUBSTAT_TYPES,
    SUBSTAT_WEIGHTING,
)
from .errors import (
    ConfigError,
    InvalidTargetError,
    RollCoreError,
    SearchCancelledError,
    UnknownAttributeKindError,
)
from .estimator import AttributeRollEstimator
from .models import (
    AttributeEvidence,
    AttributeObservation,
    RollEstimate,
    ScoredItem,
    item_from_mapping,
)
from .rounding import RoundingMode, coerce_target, round_value

__all__ = [
    "AttributeEvidence",
    "AttributeObservation",
    "AttributeRollEstimator",
    "ConfigError",
    "DECIMAL_STATS",
    "InvalidTargetError",
    "MAX_ROLLS",
    "POSSIBLE_SUBSTAT_ROLLS",
    "RollConfig",
    "RollCoreError",
    "RollEstimate",
    "RoundingMode",
    "SAMPLE_ARTIFACT",
    "SUBSTAT_LABELS",
    "SUBSTAT_TYPES",
    "SUBSTAT_WEIGHTING",
    "ScoredItem",
    "SearchCancelledError",
    "UnknownAttributeKindError",
    "clear_config_cache",
    "coerce_target",
    "default_roll_config",
    "estimate_rolls",
    "evidence_frame",
    "find_combinations",
    "find_combos",
    "format_combination",
    "item_from_mapping",
    "load_roll_config",
    "roll_config_from_mapping",
    "roll_count_histogram",
]
