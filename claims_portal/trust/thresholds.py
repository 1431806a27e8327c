"""Score cap and category threshold configuration."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import TrustCategory


class ScoreCapPolicy(str, Enum):
    """Upper bounds applied to the summed trust score.

    ``standard`` clamps to 100. ``operational`` caps at 85, which is what the
    insurer-facing auto-approval screens use.
    """

    STANDARD = "standard"
    OPERATIONAL = "operational"

    @property
    def max_score(self) -> int:
        return 85 if self is ScoreCapPolicy.OPERATIONAL else 100


@dataclass(frozen=True)
class ThresholdConfig:
    highly_trusted_min: int = 80
    trusted_min: int = 60
    moderate_risk_min: int = 40
    min_score: int = 0
    max_score: int = 100

    @classmethod
    def for_policy(cls, policy: ScoreCapPolicy | str) -> ThresholdConfig:
        return cls(max_score=ScoreCapPolicy(policy).max_score)

    def category(self, score: int) -> TrustCategory:
        if score >= self.highly_trusted_min:
            return TrustCategory.HIGHLY_TRUSTED
        if score >= self.trusted_min:
            return TrustCategory.TRUSTED
        if score >= self.moderate_risk_min:
            return TrustCategory.MODERATE_RISK
        return TrustCategory.HIGH_RISK

    def clamp_score(self, score: float) -> int:
        if score < self.min_score:
            return self.min_score
        if score > self.max_score:
            return self.max_score
        return round(score)
