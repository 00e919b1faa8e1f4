"""Lookup tables injected into the estimator, plus JSON loading helpers."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from .data import (
    DECIMAL_STATS,
    POSSIBLE_SUBSTAT_ROLLS,
    ROLL_CONFIG_ENV_VAR,
    SUBSTAT_WEIGHTING,
)
from .errors import ConfigError, UnknownAttributeKindError
from .rounding import RoundingMode, coerce_candidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollConfig:
    """Per-kind candidate rolls, weights, and rounding modes."""

    candidate_rolls: Mapping[str, tuple[float, ...]]
    weights: Mapping[str, float]
    rounding_modes: Mapping[str, RoundingMode]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "candidate_rolls",
            MappingProxyType({kind: tuple(rolls) for kind, rolls in self.candidate_rolls.items()}),
        )
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        object.__setattr__(self, "rounding_modes", MappingProxyType(dict(self.rounding_modes)))

    @classmethod
    def from_tables(
        cls,
        candidate_rolls: Mapping[str, Sequence[float]],
        weights: Mapping[str, float],
        decimal_stats: Iterable[str],
    ) -> RollConfig:
        """Build a config, treating kinds listed in ``decimal_stats`` as one-decimal.

        Every other kind present in ``candidate_rolls`` is compared as a whole number.
        """

        decimal_kinds = set(decimal_stats)
        modes = {
            kind: RoundingMode.ONE_DECIMAL if kind in decimal_kinds else RoundingMode.WHOLE_NUMBER
            for kind in candidate_rolls
        }
        return cls(candidate_rolls=candidate_rolls, weights=weights, rounding_modes=modes)

    @property
    def kinds(self) -> list[str]:
        return list(self.candidate_rolls)

    def candidates_for(self, kind: str) -> tuple[float, ...]:
        try:
            return self.candidate_rolls[kind]
        except KeyError:
            raise UnknownAttributeKindError(kind, "rolls") from None

    def weight_for(self, kind: str) -> float:
        try:
            return self.weights[kind]
        except KeyError:
            raise UnknownAttributeKindError(kind, "weights") from None

    def rounding_mode_for(self, kind: str) -> RoundingMode:
        try:
            return self.rounding_modes[kind]
        except KeyError:
            raise UnknownAttributeKindError(kind, "rounding") from None


def default_roll_config() -> RollConfig:
    """Return the config built from the bundled five-star artifact tables."""

    return RollConfig.from_tables(POSSIBLE_SUBSTAT_ROLLS, SUBSTAT_WEIGHTING, DECIMAL_STATS)


def _parse_rolls(raw: object) -> dict[str, list[float]]:
    if not isinstance(raw, Mapping):
        raise ConfigError("'rolls' must map substat names to lists of roll values.")
    parsed: dict[str, list[float]] = {}
    for kind, values in raw.items():
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise ConfigError(f"Invalid roll list for substat {kind!r}.")
        try:
            parsed[str(kind)] = [float(coerce_candidate(value)) for value in values]
        except ValueError as exc:
            raise ConfigError(f"Invalid roll value for substat {kind!r}: {exc}") from exc
    return parsed


def _parse_weights(raw: object) -> dict[str, float]:
    if not isinstance(raw, Mapping):
        raise ConfigError("'weights' must map substat names to numbers.")
    parsed: dict[str, float] = {}
    for kind, value in raw.items():
        if isinstance(value, bool):
            raise ConfigError(f"Invalid weight for substat {kind!r}: {value!r}")
        try:
            parsed[str(kind)] = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid weight for substat {kind!r}: {value!r}") from exc
    return parsed


def roll_config_from_mapping(raw_data: object) -> RollConfig:
    """Merge a JSON-compatible document over the bundled tables.

    Parameters
    ----------
    raw_data:
        Mapping with optional ``"rolls"``, ``"weights"`` and ``"decimal_stats"``
        entries. ``rolls`` and ``weights`` override the defaults per kind;
        ``decimal_stats`` replaces the default list when present.

    Raises
    ------
    ConfigError
        If the document or any of its entries has the wrong shape.
    """

    if not isinstance(raw_data, Mapping):
        raise ConfigError("Roll config must be a JSON object.")

    rolls: dict[str, list[float]] = {kind: list(values) for kind, values in POSSIBLE_SUBSTAT_ROLLS.items()}
    weights: dict[str, float] = dict(SUBSTAT_WEIGHTING)
    decimal_stats: set[str] = set(DECIMAL_STATS)

    if "rolls" in raw_data:
        rolls.update(_parse_rolls(raw_data["rolls"]))
    if "weights" in raw_data:
        weights.update(_parse_weights(raw_data["weights"]))
    if "decimal_stats" in raw_data:
        raw_decimal = raw_data["decimal_stats"]
        if isinstance(raw_decimal, (str, bytes)) or not isinstance(raw_decimal, Sequence):
            raise ConfigError("'decimal_stats' must be a list of substat names.")
        decimal_stats = {str(kind) for kind in raw_decimal}

    return RollConfig.from_tables(rolls, weights, decimal_stats)


def load_roll_config(path: str | Path | None = None) -> RollConfig:
    """Load a roll config from JSON, falling back to the bundled tables.

    The path defaults to the ``ROLL_CONFIG_PATH`` environment variable. When
    neither is given the bundled tables are returned unchanged.

    Raises
    ------
    ConfigError
        If the file cannot be read or does not hold a valid config document.
    """

    if path is None:
        env_path = os.environ.get(ROLL_CONFIG_ENV_VAR)
        if not env_path:
            return default_roll_config()
        path = env_path

    config_path = Path(path)
    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read roll config {config_path}: {exc}") from exc
    try:
        raw_data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Roll config {config_path} is not valid JSON: {exc}") from exc

    config = roll_config_from_mapping(raw_data)
    logger.info("Loaded roll config for %d substats from %s", len(config.kinds), config_path)
    return config


@lru_cache(maxsize=8)
def _cached_config(env_path: str) -> RollConfig:
    return load_roll_config(env_path) if env_path else default_roll_config()


def resolve_config(config: Optional[RollConfig]) -> RollConfig:
    """Return ``config`` or the environment/bundled default when it is ``None``.

    The default is loaded once per ``ROLL_CONFIG_PATH`` value; call
    ``clear_config_cache`` after editing the file in place.
    """

    if config is not None:
        return config
    return _cached_config(os.environ.get(ROLL_CONFIG_ENV_VAR, ""))


def clear_config_cache() -> None:
    """Forget configs loaded by ``resolve_config``."""

    _cached_config.cache_clear()
