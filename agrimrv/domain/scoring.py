"""Credit scoring engine - composite score, grades and loan eligibility"""

from dataclasses import replace
from datetime import date
from typing import List, Mapping, Optional, Sequence
from agrimrv.domain.breakdown import classify_all, rank_improvements
from agrimrv.domain.calibration import DEFAULT_CALIBRATION, Calibration, CompositeWeights
from agrimrv.domain.carbon import compute_carbon_performance
from agrimrv.domain.findings import derive_findings, findings_insights, summarize_confidence
from agrimrv.domain.geometry import estimate_area_hectares
from agrimrv.domain.models import (
    AIAnalysisResult,
    CategoryInput,
    CreditProfile,
    FarmDeclaration,
    GeoPoint,
    Grade,
    ScoreHistoryPoint,
    ScoringResult,
)
from agrimrv.domain.mrv import compute_mrv_reliability
from agrimrv.utils.date_utils import month_key, utc_today
from agrimrv.utils.numeric import clamp, finite_or_zero, round_half_up


def primary_grade(score: float) -> Grade:
    """
    Letter grade used for the score display and loan eligibility.

    - 90+: A
    - 80-89: B
    - 70-79: C
    - 60-69: D
    - below 60: F
    """
    if score >= 90:
        return Grade.A
    elif score >= 80:
        return Grade.B
    elif score >= 70:
        return Grade.C
    elif score >= 60:
        return Grade.D
    else:
        return Grade.F


def explanatory_grade(score: float) -> Grade:
    """
    Grade scale quoted in the "how scoring works" explanation.

    This scale (75/60/45) does not agree with primary_grade and never yields
    F. Both are kept until product decides which one is authoritative.
    """
    if score >= 75:
        return Grade.A
    elif score >= 60:
        return Grade.B
    elif score >= 45:
        return Grade.C
    else:
        return Grade.D


def eligible_loan_amount(score: float) -> int:
    """Loan amount step function over the composite score (currency units)"""
    if score >= 90:
        return 1000
    elif score >= 80:
        return 750
    elif score >= 70:
        return 500
    elif score >= 60:
        return 250
    else:
        return 0


def aggregate(
    carbon_performance: float,
    mrv_reliability: float,
    monthly_change_delta: int = 0,
    weights: CompositeWeights = CompositeWeights(),
) -> CreditProfile:
    """
    Blend the two sub-scores into the farmer's credit profile.

    Weights: carbon performance 70%, MRV reliability 30%. Sub-scores may be
    passed unrounded; the profile stores them rounded.
    """
    cp = finite_or_zero(carbon_performance)
    mr = finite_or_zero(mrv_reliability)
    credit_score = round_half_up(clamp(cp * weights.carbon_performance + mr * weights.mrv_reliability))

    return CreditProfile(
        credit_score=credit_score,
        carbon_performance=round_half_up(cp),
        mrv_reliability=round_half_up(mr),
        grade=primary_grade(credit_score),
        eligible_loan_amount=eligible_loan_amount(credit_score),
        monthly_change_delta=int(finite_or_zero(monthly_change_delta)),
    )


def monthly_change(history: Sequence[ScoreHistoryPoint]) -> int:
    """Score change between the two most recent history points"""
    if len(history) < 2:
        return 0
    ordered = sorted(history, key=lambda p: p.date)
    return ordered[-1].score - ordered[-2].score


def change_since_last_month(
    history: Sequence[ScoreHistoryPoint],
    credit_score: int,
    month: str,
) -> int:
    """
    Current score minus the latest score recorded before `month` (YYYY-MM).

    Earlier runs in the same month are superseded by this one, matching how
    the monthly history keeps each month's last score. 0 without a prior month.
    """
    prior = [p for p in history if p.date < month]
    if not prior:
        return 0
    return credit_score - max(prior, key=lambda p: p.date).score


def overall_trend(history: Sequence[ScoreHistoryPoint]) -> str:
    """Qualitative trend label for the history chart"""
    change = monthly_change(history)
    if change > 0:
        return "excellent"
    elif change == 0:
        return "good"
    else:
        return "declining"


def score_farm(
    declaration: FarmDeclaration,
    plot_coordinates: Sequence[GeoPoint],
    ai_results: Sequence[AIAnalysisResult],
    verification_history_ratio: float,
    document_quality_ratio: float,
    consistency_ratio: float,
    categories: Optional[Mapping[str, CategoryInput]] = None,
    history: Sequence[ScoreHistoryPoint] = (),
    practice_match: Optional[float] = None,
    calibration: Calibration = DEFAULT_CALIBRATION,
    scored_on: Optional[date] = None,
) -> ScoringResult:
    """
    Main entry point: run every calculator for one land record.

    Flow:
    1. Estimate plot area from the traced boundary
    2. Derive findings for each AI result and summarize confidence
    3. Compute carbon performance and MRV reliability
    4. Aggregate into the credit profile (unrounded sub-scores feed the blend),
       with the change against the last month before `scored_on` (UTC today)
    5. Classify the category breakdown and rank improvements
    """
    plot_area = estimate_area_hectares(plot_coordinates)

    findings = [derive_findings(r, calibration.findings) for r in ai_results]
    confidence_inputs = summarize_confidence(findings, practice_match)

    carbon = compute_carbon_performance(declaration, calibration.carbon, plot_area)
    mrv = compute_mrv_reliability(
        confidence_inputs,
        verification_history_ratio,
        document_quality_ratio,
        consistency_ratio,
        calibration.mrv,
    )

    profile = aggregate(carbon.raw_score, mrv.raw_score, weights=calibration.composite)
    month = month_key(scored_on or utc_today())
    profile = replace(
        profile,
        monthly_change_delta=change_since_last_month(history, profile.credit_score, month),
    )

    breakdown = classify_all(categories or {})

    insights: List[str] = []
    if ai_results:
        latest = max(
            range(len(ai_results)),
            key=lambda i: ai_results[i].processed_at.timestamp() if ai_results[i].processed_at else float("-inf"),
        )
        insights = findings_insights(findings[latest])

    return ScoringResult(
        plot_area_hectares=plot_area,
        findings=findings,
        confidence_inputs=confidence_inputs,
        carbon_performance=carbon,
        mrv_reliability=mrv,
        credit_profile=profile,
        explanatory_grade=explanatory_grade(profile.credit_score),
        breakdown=breakdown,
        recommendations=rank_improvements(breakdown),
        insights=insights,
    )
