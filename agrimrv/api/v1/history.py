"""GET /v1/credit/profile and /v1/credit/score-history - stored credit profiles"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from agrimrv.api.v1.schemas import (
    BreakdownEntrySchema,
    CreditProfileSchema,
    HistoryItem,
    HistoryResponse,
    ProfileResponse,
)
from agrimrv.config import settings
from agrimrv.domain.breakdown import category_info
from agrimrv.domain.exceptions import ProfileNotFoundError
from agrimrv.domain.scoring import monthly_change, overall_trend
from agrimrv.infrastructure.database.session import get_db
from agrimrv.infrastructure.database.repositories import SnapshotRepository
from agrimrv.utils.date_utils import generate_month_range, utc_today

router = APIRouter()


@router.get("/credit/profile/{profile_id}", response_model=ProfileResponse)
def get_credit_profile(profile_id: str, db: Session = Depends(get_db)):
    """
    Retrieve the latest scored credit profile for a farm profile.

    Returns:
        Most recent snapshot with its category breakdown
    """
    try:
        snapshot = SnapshotRepository(db).require_latest(profile_id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Credit profile not found")

    return ProfileResponse(
        profile_id=snapshot.profile_id,
        credit_profile=CreditProfileSchema(
            credit_score=snapshot.credit_score,
            carbon_performance=snapshot.carbon_performance,
            mrv_reliability=snapshot.mrv_reliability,
            grade=snapshot.grade,
            eligible_loan_amount=snapshot.eligible_loan_amount,
            monthly_change_delta=snapshot.monthly_change_delta,
        ),
        explanatory_grade=snapshot.explanatory_grade,
        carbon_reduction=snapshot.estimated_tco2e,
        plot_area_hectares=snapshot.plot_area_hectares,
        breakdown=[
            BreakdownEntrySchema(
                category_key=entry.category_key,
                display_name=category_info(entry.category_key).display_name,
                icon=category_info(entry.category_key).icon,
                score=entry.raw_score,
                impact_percent=entry.impact_percent,
                impact=entry.impact_tier,
                trend_label=entry.trend_label,
                trend=entry.trend_direction,
            )
            for entry in snapshot.breakdown
        ],
        created_at=snapshot.created_at.isoformat(),
    )


@router.get("/credit/score-history", response_model=HistoryResponse)
def get_score_history(
    profile_id: str = Query(..., description="Farm profile identifier"),
    months: int = Query(settings.history_months, ge=1, le=36, description="Months of history"),
    db: Session = Depends(get_db),
):
    """
    Retrieve the monthly credit score series for a farm profile.

    Months without a scoring run are omitted rather than filled.
    """
    history = SnapshotRepository(db).get_monthly_history(profile_id)
    window = set(generate_month_range(utc_today(), months))
    history = [point for point in history if point.date in window]

    return HistoryResponse(
        profile_id=profile_id,
        history=[HistoryItem(date=p.date, score=p.score) for p in history],
        monthly_change=monthly_change(history),
        trend=overall_trend(history),
    )
