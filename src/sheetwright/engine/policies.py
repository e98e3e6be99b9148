"""Formula policies for the derived quantities that have two known variants."""

from dataclasses import dataclass
from enum import StrEnum


class VitalityPolicy(StrEnum):
    """How vitality tiers and the vitality total are derived."""

    # Each tier is (base - offset) * multiplier; total is the sum of all tiers
    ADDITIVE_TIERS = "additive-tiers"
    # Notable is base * multiplier; each tier drops by a sixth of it; total is notable
    STEPPED_FRACTION = "stepped-fraction"


class ProgressionPolicy(StrEnum):
    """Where the XP needed for the next level comes from."""

    RECOMPUTED = "recomputed"
    TRUST_STORED = "trust-stored"


@dataclass(frozen=True)
class EnginePolicies:
    """The policy choice for every calculator that has one."""

    vitality: VitalityPolicy = VitalityPolicy.ADDITIVE_TIERS
    progression: ProgressionPolicy = ProgressionPolicy.RECOMPUTED
