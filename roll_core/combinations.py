"""Search for the substat rolls that could add up to an observed value."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from decimal import Decimal, InvalidOperation
from typing import Optional, TypeVar

from .data import MAX_ROLLS
from .errors import InvalidTargetError, SearchCancelledError
from .rounding import RoundingMode, coerce_candidate, coerce_target, round_value

logger = logging.getLogger(__name__)

T = TypeVar("T")

StopFn = Callable[[], bool]


def find_combinations(
    candidates: Sequence[T],
    target: object,
    rounding_mode: RoundingMode,
    *,
    max_rolls: int = MAX_ROLLS,
    should_stop: Optional[StopFn] = None,
) -> list[tuple[T, ...]]:
    """Return every multiset of ``candidates`` whose rounded sum equals ``target``.

    Candidates may repeat inside a combination. Partial sums and the target are
    both rounded with ``rounding_mode`` before being compared, a branch stops
    growing once its rounded sum reaches the target, and no combination holds
    more than ``max_rolls`` values.

    Parameters
    ----------
    candidates:
        Legal roll values for one substat kind. Must be non-negative.
    target:
        Observed accumulated value; numeric strings are accepted.
    rounding_mode:
        Precision used for every comparison.
    max_rolls:
        Upper bound on the number of rolls in a combination.
    should_stop:
        Optional callable polled once per expanded node; returning true aborts
        the search with ``SearchCancelledError``.

    Returns
    -------
    list[tuple]
        Distinct combinations, each sorted ascending and made of the caller's
        own candidate objects. The order across combinations is unspecified.

    Raises
    ------
    InvalidTargetError
        If ``target`` is not a finite number, or is too large to round to
        ``rounding_mode``.
    """

    if max_rolls < 1:
        raise ValueError("max_rolls must be a positive integer.")
    try:
        goal = round_value(coerce_target(target), rounding_mode)
    except InvalidOperation as exc:
        raise InvalidTargetError(target) from exc

    # One entry per distinct value; the first spelling supplied by the caller wins.
    rolls: dict[Decimal, T] = {}
    for candidate in candidates:
        rolls.setdefault(coerce_candidate(candidate), candidate)
    values = list(rolls.items())

    found: dict[tuple[Decimal, ...], None] = {}
    stack: list[tuple[tuple[Decimal, ...], Decimal]] = [((), Decimal(0))]
    visited = 0
    while stack:
        partial, total = stack.pop()
        visited += 1
        try:
            rounded = round_value(total, rounding_mode)
        except InvalidOperation:
            # Too many digits to round, so the sum is already far past the goal.
            continue
        if rounded == goal:
            found.setdefault(tuple(sorted(partial)), None)
        if rounded >= goal or len(partial) >= max_rolls:
            continue
        if should_stop is not None and should_stop():
            raise SearchCancelledError(
                f"Combination search for target {goal} cancelled after {visited} nodes"
            )
        for value, _ in reversed(values):
            stack.append((partial + (value,), total + value))

    logger.debug(
        "Visited %d nodes for target %s (%s), %d distinct combinations",
        visited,
        goal,
        rounding_mode.value,
        len(found),
    )
    return [tuple(rolls[value] for value in key) for key in found]
