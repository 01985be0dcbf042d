"""MRV Reliability sub-score"""

from agrimrv.domain.calibration import MRVWeights
from agrimrv.domain.models import AIConfidenceInputs, MRVReliability
from agrimrv.utils.numeric import clamp, finite_or_zero, round_half_up


def ai_confidence(inputs: AIConfidenceInputs, weights: MRVWeights = MRVWeights()) -> float:
    """Blend authenticity (50%), crop health (30%) and practice match (20%)"""
    return (
        finite_or_zero(inputs.avg_authenticity) * weights.authenticity
        + finite_or_zero(inputs.avg_health) * weights.health
        + finite_or_zero(inputs.avg_practice_match) * weights.practice_match
    )


def compute_mrv_reliability(
    ai_inputs: AIConfidenceInputs,
    verification_history_ratio: float,
    document_quality_ratio: float,
    consistency_ratio: float,
    weights: MRVWeights = MRVWeights(),
) -> MRVReliability:
    """
    Confidence in the evidence behind a declaration, 0-100.

    Ratios arrive pre-normalized to 0-100 from upstream verification stats.
    Weights: AI confidence 40%, verification history 30%, document quality 20%,
    consistency 10%.
    """
    confidence = ai_confidence(ai_inputs, weights)
    raw_score = clamp(
        confidence * weights.ai_confidence
        + finite_or_zero(verification_history_ratio) * weights.verification_history
        + finite_or_zero(document_quality_ratio) * weights.document_quality
        + finite_or_zero(consistency_ratio) * weights.consistency
    )
    return MRVReliability(score=round_half_up(raw_score), raw_score=raw_score, ai_confidence=confidence)
