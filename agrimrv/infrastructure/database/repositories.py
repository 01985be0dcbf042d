"""Data access layer for credit profile snapshots"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from agrimrv.infrastructure.database.models import CreditProfileSnapshot, BreakdownEntryRecord
from agrimrv.domain.exceptions import ProfileNotFoundError
from agrimrv.domain.models import ScoreHistoryPoint, ScoringResult
from agrimrv.utils.date_utils import month_key


class SnapshotRepository:
    """Repository for scored credit profiles"""

    def __init__(self, db: Session):
        self.db = db

    def create_snapshot(self, profile_id: str, result: ScoringResult) -> CreditProfileSnapshot:
        """Persist a scoring run with its breakdown entries"""
        profile = result.credit_profile
        db_snapshot = CreditProfileSnapshot(
            profile_id=profile_id,
            credit_score=profile.credit_score,
            carbon_performance=profile.carbon_performance,
            mrv_reliability=profile.mrv_reliability,
            grade=profile.grade.value,
            explanatory_grade=result.explanatory_grade.value,
            eligible_loan_amount=profile.eligible_loan_amount,
            monthly_change_delta=profile.monthly_change_delta,
            estimated_tco2e=result.carbon_performance.estimated_tco2e,
            plot_area_hectares=result.plot_area_hectares,
        )
        self.db.add(db_snapshot)
        self.db.flush()  # Get ID without committing

        for entry in result.breakdown:
            self.db.add(
                BreakdownEntryRecord(
                    snapshot_id=db_snapshot.id,
                    category_key=entry.category_key,
                    raw_score=entry.raw_score,
                    impact_percent=entry.impact_percent,
                    impact_tier=entry.impact_tier.value,
                    trend_label=entry.trend_label,
                    trend_direction=entry.trend_direction.value,
                    recognized=entry.recognized,
                )
            )

        return db_snapshot

    def get_latest(self, profile_id: str) -> Optional[CreditProfileSnapshot]:
        """Fetch the most recent snapshot for a profile"""
        return (
            self.db.query(CreditProfileSnapshot)
            .filter(CreditProfileSnapshot.profile_id == profile_id)
            .order_by(CreditProfileSnapshot.created_at.desc())
            .first()
        )

    def require_latest(self, profile_id: str) -> CreditProfileSnapshot:
        """
        Fetch the most recent snapshot, failing when the profile was never scored.

        Raises:
            ProfileNotFoundError: No snapshot exists for the profile
        """
        snapshot = self.get_latest(profile_id)
        if snapshot is None:
            raise ProfileNotFoundError(f"No credit profile for {profile_id}")
        return snapshot

    def get_snapshots(self, profile_id: str, limit: int = 100) -> List[CreditProfileSnapshot]:
        """Fetch recent snapshots, oldest first"""
        rows = (
            self.db.query(CreditProfileSnapshot)
            .filter(CreditProfileSnapshot.profile_id == profile_id)
            .order_by(CreditProfileSnapshot.created_at.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(rows))

    def get_monthly_history(self, profile_id: str) -> List[ScoreHistoryPoint]:
        """Collapse snapshots into one point per month, keeping each month's last score"""
        by_month: Dict[str, int] = {}
        for snapshot in self.get_snapshots(profile_id):
            by_month[month_key(snapshot.created_at)] = snapshot.credit_score
        return [ScoreHistoryPoint(date=month, score=score) for month, score in sorted(by_month.items())]
