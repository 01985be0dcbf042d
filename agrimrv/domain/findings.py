"""AI findings derivation from raw AI classification output"""

from statistics import fmean
from typing import List, Optional, Sequence
from agrimrv.domain.calibration import FindingsCalibration
from agrimrv.domain.models import (
    AIAnalysisResult,
    AIConfidenceInputs,
    AIFindings,
    VerificationStatus,
)
from agrimrv.utils.numeric import clamp, finite_or_zero, round_half_up


def derive_findings(
    result: AIAnalysisResult,
    calibration: FindingsCalibration = FindingsCalibration(),
) -> AIFindings:
    """
    Expand an image score and a credit-risk score into four 0-100 metrics.

    - crop health follows the image score directly
    - authenticity and maturity/quality are offset baselines nudged upwards by
      the image and credit-risk scores respectively
    - credit impact is the credit-risk score in sixths, never below 5 points
    """
    image_score = finite_or_zero(result.image_score)
    risk_score = finite_or_zero(result.credit_risk_score)
    c = calibration

    def metric(value: float) -> int:
        return int(clamp(round_half_up(value), 0, 100))

    return AIFindings(
        crop_health=metric(image_score),
        authenticity=metric(c.authenticity_offset + image_score / c.authenticity_divisor),
        maturity=metric(c.maturity_offset + risk_score / c.maturity_divisor),
        quality=metric(c.quality_offset + risk_score / c.quality_divisor),
        credit_impact_points=max(c.credit_impact_floor, round_half_up(risk_score / c.credit_impact_divisor)),
    )


def verification_status(
    result: AIAnalysisResult,
    calibration: FindingsCalibration = FindingsCalibration(),
) -> VerificationStatus:
    """Bucket a submission by yield risk; unscored submissions are still processing"""
    if result.yield_risk is None:
        return VerificationStatus.PROCESSING
    risk = finite_or_zero(result.yield_risk)
    if risk < calibration.verified_below_risk:
        return VerificationStatus.VERIFIED
    if risk < calibration.review_below_risk:
        return VerificationStatus.NEEDS_REVIEW
    return VerificationStatus.PROCESSING


def confidence(result: AIAnalysisResult) -> float:
    """Headline confidence: the credit-risk score, or the image score when that is 0"""
    return finite_or_zero(result.credit_risk_score) or finite_or_zero(result.image_score)


def summarize_confidence(
    findings: Sequence[AIFindings],
    practice_match: Optional[float] = None,
) -> AIConfidenceInputs:
    """
    Aggregate per-submission findings into MRV confidence inputs.

    Practice match is supplied by the caller when a declared-vs-observed
    comparison exists; otherwise the mean quality metric stands in for it.
    """
    if not findings:
        return AIConfidenceInputs(avg_practice_match=finite_or_zero(practice_match))

    avg_quality = fmean(f.quality for f in findings)
    return AIConfidenceInputs(
        avg_authenticity=fmean(f.authenticity for f in findings),
        avg_health=fmean(f.crop_health for f in findings),
        avg_practice_match=avg_quality if practice_match is None else finite_or_zero(practice_match),
    )


def findings_insights(findings: AIFindings) -> List[str]:
    """Display-only insight lines for a single analysis"""
    insights = []
    if findings.crop_health >= 70:
        insights.append("AI detected strong crop health signals")
    else:
        insights.append("Crop health signals are weak, consider uploading clearer photos")
    if findings.quality >= 85:
        insights.append("No signs of pest damage in images")
    if findings.maturity >= 85:
        insights.append("Harvest timing appears optimal")
    if findings.authenticity < 90:
        insights.append("Some images could not be fully authenticated")
    return insights
