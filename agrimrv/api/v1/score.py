"""POST /v1/credit/score - carbon-credit scoring endpoint"""

import time
from dataclasses import asdict
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from agrimrv.api.v1.schemas import (
    BreakdownEntrySchema,
    CarbonPerformanceSchema,
    CreditProfileSchema,
    FindingsSchema,
    RecommendationSchema,
    ScoreRequest,
    ScoreResponse,
)
from agrimrv.api.dependencies import get_ai_client, get_calibration, get_request_id
from agrimrv.infrastructure.database.session import get_db
from agrimrv.infrastructure.database.repositories import SnapshotRepository
from agrimrv.infrastructure.clients.ai_service import AIServiceClient
from agrimrv.domain.calibration import Calibration
from agrimrv.domain.models import CreditProfile, ScoreBreakdownEntry
from agrimrv.domain.scoring import score_farm
from agrimrv.domain.validation import validate_declaration
from agrimrv.domain.exceptions import AIServiceError, IncompleteDeclarationError
from agrimrv.infrastructure.observability.metrics import record_scoring, ai_fetch_failures_counter
from agrimrv.infrastructure.observability.logging import log_scoring

router = APIRouter()


def profile_schema(profile: CreditProfile) -> CreditProfileSchema:
    return CreditProfileSchema(
        credit_score=profile.credit_score,
        carbon_performance=profile.carbon_performance,
        mrv_reliability=profile.mrv_reliability,
        grade=profile.grade.value,
        eligible_loan_amount=profile.eligible_loan_amount,
        monthly_change_delta=profile.monthly_change_delta,
    )


def breakdown_schema(entry: ScoreBreakdownEntry) -> BreakdownEntrySchema:
    return BreakdownEntrySchema(
        category_key=entry.category_key,
        display_name=entry.display_name,
        icon=entry.icon,
        score=entry.raw_score,
        max_score=entry.max_score,
        impact_percent=entry.impact_percent,
        impact=entry.impact_tier.value,
        trend_label=entry.trend_label,
        trend=entry.trend_direction.value,
    )


@router.post("/credit/score", response_model=ScoreResponse)
async def create_score(
    request_body: ScoreRequest,
    request: Request,
    db: Session = Depends(get_db),
    ai_client: AIServiceClient = Depends(get_ai_client),
    calibration: Calibration = Depends(get_calibration),
):
    """
    Score one land record and store the resulting credit profile snapshot.

    Flow:
    1. Optionally check the declaration is complete
    2. Use the supplied AI results, or fetch them from the AI service
    3. Run the scoring engine (month-over-month change from stored history)
    4. Persist snapshot + breakdown
    5. Return the full scoring result
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        declaration = request_body.declaration.to_domain()
        points = [p.to_domain() for p in request_body.plot_coordinates]

        # 1. Completeness check
        if request_body.validate_completeness:
            validate_declaration(declaration, points)

        # 2. AI evidence
        if request_body.ai_results is None:
            ai_results = await ai_client.get_results(request_body.profile_id)
        else:
            ai_results = [r.to_domain() for r in request_body.ai_results]

        # 3. Score
        repo = SnapshotRepository(db)
        history = repo.get_monthly_history(request_body.profile_id)
        result = score_farm(
            declaration=declaration,
            plot_coordinates=points,
            ai_results=ai_results,
            verification_history_ratio=request_body.verification_history_ratio,
            document_quality_ratio=request_body.document_quality_ratio,
            consistency_ratio=request_body.consistency_ratio,
            categories={key: c.to_domain() for key, c in request_body.categories.items()},
            history=history,
            practice_match=request_body.practice_match,
            calibration=calibration,
        )

        # 4. Persist
        snapshot = repo.create_snapshot(request_body.profile_id, result)
        db.commit()

        # Record metrics and logs
        profile = result.credit_profile
        duration_ms = (time.time() - start_time) * 1000
        record_scoring(
            profile.grade.value,
            profile.eligible_loan_amount,
            sum(1 for e in result.breakdown if not e.recognized),
        )
        log_scoring(
            request_id,
            request_body.profile_id,
            profile.credit_score,
            profile.grade.value,
            profile.eligible_loan_amount,
            duration_ms,
        )

        carbon = result.carbon_performance
        return ScoreResponse(
            snapshot_id=str(snapshot.id),
            profile_id=request_body.profile_id,
            plot_area_hectares=result.plot_area_hectares,
            carbon=CarbonPerformanceSchema(
                estimated_tco2e=carbon.estimated_tco2e,
                score=carbon.score,
                rice_reduction=carbon.rice_reduction,
                agro_reduction=carbon.agro_reduction,
                plot_area_hectares=carbon.plot_area_hectares,
            ),
            mrv_reliability=result.mrv_reliability.score,
            ai_confidence=result.mrv_reliability.ai_confidence,
            credit_profile=profile_schema(profile),
            explanatory_grade=result.explanatory_grade.value,
            findings=[FindingsSchema(**asdict(f)) for f in result.findings],
            breakdown=[breakdown_schema(e) for e in result.breakdown],
            recommendations=[
                RecommendationSchema(title=r.title, description=r.description, potential_impact=r.potential_impact)
                for r in result.recommendations
            ],
            insights=result.insights,
        )

    except IncompleteDeclarationError as e:
        db.rollback()
        logging.warning(f"Incomplete declaration: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.errors)

    except AIServiceError as e:
        ai_fetch_failures_counter.inc()
        db.rollback()
        logging.error(f"AI service error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="AI analysis service unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
