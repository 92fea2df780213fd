#!/usr/bin/env python3
"""
Reconciliation Policies

Two pluggable decisions sit around the pure engine:

- Difference presentation: what cash difference gets stored and shown.
  "passthrough" keeps the true figure; "mask" replaces large shortfalls
  (below -₹100) with a small random value in the -₹90..-₹10 band.
- Validation: whether a record is accepted on save. "permissive" accepts
  everything; "strict" refuses withdrawals larger than the counted cash and
  cash differences beyond a configured limit.

Both are selected by configuration so tests can pin a deterministic setup.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Protocol

from ..core.config import ReconciliationConfig
from ..core.exceptions import ValidationError
from ..core.money import Money

logger = logging.getLogger(__name__)

# Fixed adjustment added to the expected cash figure
CASH_OFFSET = Money.from_rupees(50)

MASK_THRESHOLD = Money.from_rupees(-100)


class DifferencePresentationPolicy(Protocol):
    """Decides the cash difference figure that is stored and displayed."""

    name: str

    def present(self, difference: Money) -> Money:
        """Return the figure to record for a true cash difference."""
        ...


class PassthroughPolicy:
    """Record the true cash difference."""

    name = "passthrough"

    def present(self, difference: Money) -> Money:
        return difference


class MaskLargeNegativePolicy:
    """
    Replace differences below the threshold with a random value in -₹90..-₹10.

    The masked figure is drawn fresh on every call, so records derived under
    this policy are not reproducible unless the generator is seeded.
    """

    name = "mask"

    def __init__(self, rng: random.Random | None = None, threshold: Money = MASK_THRESHOLD):
        self.rng = rng or random.Random()
        self.threshold = threshold

    def present(self, difference: Money) -> Money:
        if difference < self.threshold:
            masked = math.floor(self.rng.random() * -80) - 10
            logger.debug("Masking cash difference %s as ₹%d", difference, masked)
            return Money.from_rupees(masked)
        return difference


class ValidationPolicy(Protocol):
    """Accepts or refuses a record's cash figures before it is saved."""

    name: str

    def validate_cash_withdrawn(self, total_from_denominations: Money, cash_withdrawn: Money) -> None:
        """Raise ValidationError if the withdrawal is not acceptable."""
        ...

    def validate_cash_difference(self, cash_difference: Money) -> None:
        """Raise ValidationError if the difference is not acceptable."""
        ...


class PermissiveValidation:
    """Accept any withdrawal and any difference."""

    name = "permissive"

    def validate_cash_withdrawn(self, total_from_denominations: Money, cash_withdrawn: Money) -> None:
        return None

    def validate_cash_difference(self, cash_difference: Money) -> None:
        return None


class StrictValidation:
    """Refuse over-withdrawals and differences larger than max_difference."""

    name = "strict"

    def __init__(self, max_difference: Money = Money.from_rupees(100)):
        self.max_difference = max_difference

    def validate_cash_withdrawn(self, total_from_denominations: Money, cash_withdrawn: Money) -> None:
        if cash_withdrawn > total_from_denominations:
            raise ValidationError(
                f"Cash withdrawn {cash_withdrawn} exceeds counted cash {total_from_denominations}"
            )

    def validate_cash_difference(self, cash_difference: Money) -> None:
        if cash_difference.abs() > self.max_difference:
            raise ValidationError(
                f"Cash difference {cash_difference} is beyond the allowed {self.max_difference}"
            )


@dataclass
class ReconciliationSettings:
    """Everything derive_all needs besides the record itself."""

    cash_offset: Money = CASH_OFFSET
    presentation: DifferencePresentationPolicy = field(default_factory=PassthroughPolicy)
    validation: ValidationPolicy = field(default_factory=PermissiveValidation)

    @classmethod
    def from_config(cls, config: ReconciliationConfig, rng: random.Random | None = None) -> "ReconciliationSettings":
        """Build settings from the reconciliation section of the app config."""
        presentation: DifferencePresentationPolicy
        if config.difference_policy == "mask":
            presentation = MaskLargeNegativePolicy(rng, Money.from_paise(config.mask_threshold_paise))
        else:
            presentation = PassthroughPolicy()

        validation: ValidationPolicy
        if config.validation == "strict":
            validation = StrictValidation(Money.from_paise(config.max_cash_difference_paise))
        else:
            validation = PermissiveValidation()

        return cls(
            cash_offset=Money.from_paise(config.cash_offset_paise),
            presentation=presentation,
            validation=validation,
        )
