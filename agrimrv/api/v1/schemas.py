"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Dict, List, Optional

from agrimrv.domain.models import (
    AIAnalysisResult,
    Agroforestry,
    CategoryInput,
    FarmDeclaration,
    GeoPoint,
    RiceAWD,
    StrawManagement,
    WetDryCycle,
)


class GeoPointSchema(BaseModel):
    latitude: float
    longitude: float

    def to_domain(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class RiceAWDSchema(BaseModel):
    area_hectares: Optional[float] = Field(None, description="Rice area under AWD")
    sowing_date: Optional[date] = None
    wet_dry_cycle: WetDryCycle = WetDryCycle.W7D3
    straw_management: StrawManagement = StrawManagement.INCORPORATED


class AgroforestrySchema(BaseModel):
    area_hectares: Optional[float] = None
    tree_density_per_hectare: Optional[float] = None
    species: List[str] = []
    intercrop_species: List[str] = []


class FarmDeclarationSchema(BaseModel):
    """Practice declaration for one land record"""

    rice_awd: RiceAWDSchema = RiceAWDSchema()
    agroforestry: AgroforestrySchema = AgroforestrySchema()
    cooperative_membership: str = ""
    training_completed: bool = False

    def to_domain(self) -> FarmDeclaration:
        return FarmDeclaration(
            rice_awd=RiceAWD(
                area_hectares=self.rice_awd.area_hectares,
                sowing_date=self.rice_awd.sowing_date,
                wet_dry_cycle=self.rice_awd.wet_dry_cycle,
                straw_management=self.rice_awd.straw_management,
            ),
            agroforestry=Agroforestry(
                area_hectares=self.agroforestry.area_hectares,
                tree_density_per_hectare=self.agroforestry.tree_density_per_hectare,
                species=frozenset(self.agroforestry.species),
                intercrop_species=frozenset(self.agroforestry.intercrop_species),
            ),
            cooperative_membership=self.cooperative_membership,
            training_completed=self.training_completed,
        )


class AIResultSchema(BaseModel):
    """One AI analysis result as produced by the classification service"""

    image_score: float
    credit_risk_score: float
    processed_at: Optional[datetime] = None
    yield_risk: Optional[float] = None

    def to_domain(self) -> AIAnalysisResult:
        return AIAnalysisResult(
            image_score=self.image_score,
            credit_risk_score=self.credit_risk_score,
            processed_at=self.processed_at,
            yield_risk=self.yield_risk,
        )


class CategoryInputSchema(BaseModel):
    score: float = 0
    impact: float = 0
    trend: str = ""

    def to_domain(self) -> CategoryInput:
        return CategoryInput(raw_score=self.score, impact_percent=self.impact, trend_label=self.trend)


class ScoreRequest(BaseModel):
    """Request body for POST /v1/credit/score"""

    profile_id: str = Field(..., min_length=1, description="Farm profile identifier")
    declaration: FarmDeclarationSchema
    plot_coordinates: List[GeoPointSchema] = []
    ai_results: Optional[List[AIResultSchema]] = Field(
        None, description="Omit to fetch results from the AI service"
    )
    verification_history_ratio: float = 0
    document_quality_ratio: float = 0
    consistency_ratio: float = 0
    practice_match: Optional[float] = None
    categories: Dict[str, CategoryInputSchema] = {}
    validate_completeness: bool = False


class FindingsSchema(BaseModel):
    crop_health: int
    authenticity: int
    maturity: int
    quality: int
    credit_impact_points: int


class CarbonPerformanceSchema(BaseModel):
    estimated_tco2e: float
    score: int
    rice_reduction: float
    agro_reduction: float
    plot_area_hectares: float


class CreditProfileSchema(BaseModel):
    credit_score: int
    carbon_performance: int
    mrv_reliability: int
    grade: str
    eligible_loan_amount: int
    monthly_change_delta: int


class BreakdownEntrySchema(BaseModel):
    category_key: str
    display_name: str
    icon: str
    score: int
    max_score: int = 100
    impact_percent: float
    impact: str
    trend_label: str
    trend: str


class RecommendationSchema(BaseModel):
    title: str
    description: str
    potential_impact: str


class ScoreResponse(BaseModel):
    """Response for POST /v1/credit/score"""

    snapshot_id: str
    profile_id: str
    plot_area_hectares: float
    carbon: CarbonPerformanceSchema
    mrv_reliability: int
    ai_confidence: float
    credit_profile: CreditProfileSchema
    explanatory_grade: str
    findings: List[FindingsSchema]
    breakdown: List[BreakdownEntrySchema]
    recommendations: List[RecommendationSchema]
    insights: List[str]


class ProfileResponse(BaseModel):
    """Response for GET /v1/credit/profile/{profile_id}"""

    profile_id: str
    credit_profile: CreditProfileSchema
    explanatory_grade: str
    carbon_reduction: float
    plot_area_hectares: float
    breakdown: List[BreakdownEntrySchema]
    created_at: str


class HistoryItem(BaseModel):
    date: str
    score: int


class HistoryResponse(BaseModel):
    """Response for GET /v1/credit/score-history"""

    profile_id: str
    history: List[HistoryItem]
    monthly_change: int
    trend: str


class AreaRequest(BaseModel):
    points: List[GeoPointSchema]


class AreaResponse(BaseModel):
    area_hectares: float


class FindingsResponse(BaseModel):
    findings: FindingsSchema
    status: str
    confidence: float
    insights: List[str]
