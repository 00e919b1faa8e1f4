"""Assemble per-substat roll evidence for a scored item."""

from __future__ import annotations

import logging
from typing import Optional

from .combinations import find_combinations
from .config import RollConfig, default_roll_config
from .data import MAX_ROLLS
from .errors import InvalidTargetError, UnknownAttributeKindError
from .models import AttributeEvidence, AttributeObservation, RollEstimate, ScoredItem

logger = logging.getLogger(__name__)


class AttributeRollEstimator:
    """Explain each substat of an item as combinations of legal rolls.

    The estimator stops at evidence: weights and roll combinations per substat.
    It does not fold them into a single rating.
    """

    def __init__(self, config: Optional[RollConfig] = None, *, max_rolls: int = MAX_ROLLS) -> None:
        self.config = config if config is not None else default_roll_config()
        self.max_rolls = max_rolls

    def evaluate(self, observation: AttributeObservation) -> AttributeEvidence:
        """Return the evidence for one substat.

        Raises
        ------
        UnknownAttributeKindError
            If the kind is missing from any lookup table.
        InvalidTargetError
            If the observed amount is not numeric.
        """

        kind = observation.kind
        candidates = self.config.candidates_for(kind)
        weight = self.config.weight_for(kind)
        mode = self.config.rounding_mode_for(kind)
        try:
            combinations = find_combinations(
                candidates, observation.amount, mode, max_rolls=self.max_rolls
            )
        except InvalidTargetError as exc:
            raise InvalidTargetError(observation.amount, kind) from exc
        if not combinations:
            logger.info("No roll combination reaches %s for %s", observation.amount, kind)
        return AttributeEvidence(
            kind=kind,
            amount=observation.amount,
            weight=weight,
            rounding_mode=mode,
            combinations=combinations,
        )

    def estimate(self, item: ScoredItem) -> RollEstimate:
        """Evaluate every substat, isolating configuration failures per substat."""

        evidence: list[AttributeEvidence] = []
        for observation in item.substats:
            try:
                entry = self.evaluate(observation)
            except UnknownAttributeKindError as exc:
                logger.warning("Skipping substat %r: %s", observation.kind, exc)
                entry = AttributeEvidence(
                    kind=observation.kind,
                    amount=observation.amount,
                    weight=self.config.weights.get(observation.kind),
                    rounding_mode=self.config.rounding_modes.get(observation.kind),
                    error=str(exc),
                )
            evidence.append(entry)
        return RollEstimate(item=item, evidence=evidence)
