"""Built-in substat tables for five-star artifacts."""

from __future__ import annotations

from typing import Final

SUBSTAT_TYPES: Final[list[str]] = [
    "HP",
    "Atk",
    "Def",
    "HP%",
    "Atk%",
    "Def%",
    "EM",
    "ER",
    "critRate",
    "critDmg",
]

SUBSTAT_LABELS: Final[dict[str, str]] = {
    "HP": "HP",
    "Atk": "ATK",
    "Def": "DEF",
    "HP%": "HP%",
    "Atk%": "ATK%",
    "Def%": "DEF%",
    "EM": "Elemental Mastery",
    "ER": "Energy Recharge",
    "critRate": "CRIT Rate",
    "critDmg": "CRIT DMG",
}

# Each substat roll lands on one of four tiers (70%, 80%, 90%, 100%).
POSSIBLE_SUBSTAT_ROLLS: Final[dict[str, list[float]]] = {
    "HP": [209.13, 239.0, 268.88, 298.75],
    "Atk": [13.62, 15.56, 17.51, 19.45],
    "Def": [16.2, 18.52, 20.83, 23.15],
    "HP%": [4.08, 4.66, 5.25, 5.83],
    "Atk%": [4.08, 4.66, 5.25, 5.83],
    "Def%": [5.1, 5.83, 6.56, 7.29],
    "EM": [16.32, 18.65, 20.98, 23.31],
    "ER": [4.53, 5.18, 5.83, 6.48],
    "critRate": [2.72, 3.11, 3.5, 3.89],
    "critDmg": [5.44, 6.22, 6.99, 7.77],
}

SUBSTAT_WEIGHTING: Final[dict[str, float]] = {
    "HP": 0.1,
    "Atk": 0.3,
    "Def": 0.1,
    "HP%": 0.5,
    "Atk%": 0.75,
    "Def%": 0.5,
    "EM": 0.5,
    "ER": 0.5,
    "critRate": 1.0,
    "critDmg": 1.0,
}

# Percentage substats are displayed to one decimal place, flat ones as integers.
DECIMAL_STATS: Final[frozenset[str]] = frozenset(
    {"HP%", "Atk%", "Def%", "ER", "critRate", "critDmg"}
)

# No substat can take more than six rolls on a fully levelled artifact.
MAX_ROLLS: Final[int] = 6

SAMPLE_ARTIFACT: Final[dict[str, object]] = {
    "name": "Viridescent Venerer's Vessel",
    "slot": "goblet",
    "level": "20",
    "mainStat": "Atk%",
    "mainStatAmount": "46.6",
    "substats": [
        {"stat": "critRate", "amount": "12.8"},
        {"stat": "critDmg", "amount": "14.0"},
        {"stat": "Def%", "amount": "5.8"},
        {"stat": "Def", "amount": "21"},
    ],
}

ROLL_CONFIG_ENV_VAR: Final[str] = "ROLL_CONFIG_PATH"
