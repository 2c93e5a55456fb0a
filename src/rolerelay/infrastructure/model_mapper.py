"""
Model selection.

Maps a (tier, purpose) pair to a model identifier. This is configuration,
not orchestration logic: the orchestrator receives the mapping as a
callable and passes the resulting identifier to every worker call.
"""

from dataclasses import dataclass

from rolerelay.domain.models import ModelPurpose, ModelTier


@dataclass(frozen=True)
class ModelMap:
    """Model identifier per tier and purpose."""

    high_think: str = "o4-mini"
    high_dev: str = "gpt-5-mini"
    mid_think: str = "gpt-5-mini"
    mid_dev: str = "gpt-4.1-mini"

    def model_for(self, tier: ModelTier, purpose: ModelPurpose) -> str:
        if tier is ModelTier.HIGH:
            return self.high_think if purpose is ModelPurpose.THINK else self.high_dev
        return self.mid_think if purpose is ModelPurpose.THINK else self.mid_dev


DEFAULT_MODEL_MAP = ModelMap()


def model_for(tier: ModelTier, purpose: ModelPurpose) -> str:
    """Model identifier from the default map."""
    return DEFAULT_MODEL_MAP.model_for(tier, purpose)
