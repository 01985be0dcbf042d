"""SQLAlchemy ORM models for credit profile snapshots"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreditProfileSnapshot(Base):
    """One scoring run; rows are only ever inserted"""

    __tablename__ = "credit_profile_snapshot"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(Text, nullable=False, index=True)
    credit_score = Column(Integer, nullable=False)
    carbon_performance = Column(Integer, nullable=False)
    mrv_reliability = Column(Integer, nullable=False)
    grade = Column(String(1), nullable=False)
    explanatory_grade = Column(String(1), nullable=False)
    eligible_loan_amount = Column(Integer, nullable=False)
    monthly_change_delta = Column(Integer, nullable=False, default=0)
    estimated_tco2e = Column(Float, nullable=False)
    plot_area_hectares = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    breakdown = relationship("BreakdownEntryRecord", back_populates="snapshot", cascade="all, delete-orphan")


class BreakdownEntryRecord(Base):
    """Classified category within a snapshot"""

    __tablename__ = "score_breakdown_entry"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    snapshot_id = Column(Uuid(as_uuid=True), ForeignKey("credit_profile_snapshot.id", ondelete="CASCADE"), nullable=False)
    category_key = Column(Text, nullable=False)
    raw_score = Column(Integer, nullable=False)
    impact_percent = Column(Float, nullable=False)
    impact_tier = Column(Text, nullable=False)
    trend_label = Column(Text, nullable=False)
    trend_direction = Column(Text, nullable=False)
    recognized = Column(Boolean, nullable=False, default=True)

    snapshot = relationship("CreditProfileSnapshot", back_populates="breakdown")
