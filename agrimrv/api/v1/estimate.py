"""Stateless calculator endpoints used while a farmer edits a record"""

from dataclasses import asdict
from fastapi import APIRouter, Depends

from agrimrv.api.v1.schemas import AIResultSchema, AreaRequest, AreaResponse, FindingsResponse, FindingsSchema
from agrimrv.api.dependencies import get_calibration
from agrimrv.domain.calibration import Calibration
from agrimrv.domain.findings import confidence, derive_findings, findings_insights, verification_status
from agrimrv.domain.geometry import estimate_area_hectares

router = APIRouter()


@router.post("/geometry/area", response_model=AreaResponse)
def estimate_area(request_body: AreaRequest):
    """Approximate hectares enclosed by a traced plot boundary"""
    points = [p.to_domain() for p in request_body.points]
    return AreaResponse(area_hectares=estimate_area_hectares(points))


@router.post("/ai/findings", response_model=FindingsResponse)
def explain_findings(
    request_body: AIResultSchema,
    calibration: Calibration = Depends(get_calibration),
):
    """Derive display findings, verification status and confidence for one AI result"""
    result = request_body.to_domain()
    findings = derive_findings(result, calibration.findings)
    return FindingsResponse(
        findings=FindingsSchema(**asdict(findings)),
        status=verification_status(result, calibration.findings).value,
        confidence=confidence(result),
        insights=findings_insights(findings),
    )
