"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from agrimrv.api.main import create_app
from agrimrv.infrastructure.database.models import Base
from agrimrv.infrastructure.database.session import get_db
from agrimrv.domain.models import (
    AIAnalysisResult,
    Agroforestry,
    FarmDeclaration,
    GeoPoint,
    RiceAWD,
    StrawManagement,
    WetDryCycle,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_declaration() -> FarmDeclaration:
    """1.8 ha AWD rice plus 0.7 ha agroforestry at 150 trees/ha"""
    return FarmDeclaration(
        rice_awd=RiceAWD(
            area_hectares=1.8,
            sowing_date=date(2026, 6, 15),
            wet_dry_cycle=WetDryCycle.W7D3,
            straw_management=StrawManagement.INCORPORATED,
        ),
        agroforestry=Agroforestry(
            area_hectares=0.7,
            tree_density_per_hectare=150,
            species=frozenset({"COCONUT", "MANGO"}),
            intercrop_species=frozenset({"BEANS"}),
        ),
        cooperative_membership="Tan Phu Coop",
        training_completed=True,
    )


@pytest.fixture
def square_plot() -> list[GeoPoint]:
    """0.001 degree square at the equator"""
    return [
        GeoPoint(0.0, 0.0),
        GeoPoint(0.0, 0.001),
        GeoPoint(0.001, 0.001),
        GeoPoint(0.001, 0.0),
    ]


@pytest.fixture
def sample_ai_result() -> AIAnalysisResult:
    return AIAnalysisResult(
        image_score=85,
        credit_risk_score=72,
        processed_at=datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc),
        yield_risk=18,
    )


@pytest.fixture
def score_payload() -> dict:
    """Request body for POST /v1/credit/score matching sample_declaration"""
    return {
        "profile_id": "farm_001",
        "declaration": {
            "rice_awd": {
                "area_hectares": 1.8,
                "sowing_date": "2026-06-15",
                "wet_dry_cycle": "7W3D",
                "straw_management": "INCORPORATED",
            },
            "agroforestry": {
                "area_hectares": 0.7,
                "tree_density_per_hectare": 150,
                "species": ["COCONUT", "MANGO"],
                "intercrop_species": ["BEANS"],
            },
            "cooperative_membership": "Tan Phu Coop",
            "training_completed": True,
        },
        "plot_coordinates": [
            {"latitude": 0.0, "longitude": 0.0},
            {"latitude": 0.0, "longitude": 0.001},
            {"latitude": 0.001, "longitude": 0.001},
            {"latitude": 0.001, "longitude": 0.0},
        ],
        "ai_results": [
            {
                "image_score": 85,
                "credit_risk_score": 72,
                "processed_at": "2026-10-01T08:00:00+00:00",
                "yield_risk": 18,
            }
        ],
        "verification_history_ratio": 85,
        "document_quality_ratio": 82,
        "consistency_ratio": 78,
        "categories": {
            "rice_farming": {"score": 82, "impact": 30, "trend": "excellent"},
            "agroforestry": {"score": 64, "impact": 25, "trend": "good"},
            "evidence_quality": {"score": 71, "impact": 20, "trend": "good"},
            "gps_verification": {"score": 100, "impact": 15, "trend": "excellent"},
            "declaration_completion": {"score": 55, "impact": 10, "trend": "fair"},
        },
    }
