"""Domain models - pure Python dataclasses representing scoring entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, List, Optional


class WetDryCycle(str, Enum):
    """AWD irrigation cycle (days wet / days dry)"""

    W7D3 = "7W3D"
    W7D7 = "7W7D"
    W10D10 = "10W10D"
    W14D14 = "14W14D"
    CONTINUOUS = "CONTINUOUS"


class StrawManagement(str, Enum):
    INCORPORATED = "INCORPORATED"
    REMOVED = "REMOVED"
    BURNED = "BURNED"
    SURFACE = "SURFACE"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ImpactTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrendDirection(str, Enum):
    UP = "up"
    STABLE = "stable"
    DOWN = "down"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    NEEDS_REVIEW = "needs_review"
    PROCESSING = "processing"


@dataclass(frozen=True)
class GeoPoint:
    """Boundary vertex traced by the farmer, in degrees"""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class RiceAWD:
    """Rice grown under Alternate Wetting and Drying"""

    area_hectares: float = 0.0
    sowing_date: Optional[date] = None
    wet_dry_cycle: WetDryCycle = WetDryCycle.W7D3
    straw_management: StrawManagement = StrawManagement.INCORPORATED


@dataclass(frozen=True)
class Agroforestry:
    area_hectares: float = 0.0
    tree_density_per_hectare: float = 0.0
    species: FrozenSet[str] = frozenset()
    intercrop_species: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class FarmDeclaration:
    """Practice data submitted for one land record"""

    rice_awd: RiceAWD = field(default_factory=RiceAWD)
    agroforestry: Agroforestry = field(default_factory=Agroforestry)
    cooperative_membership: str = ""
    training_completed: bool = False


@dataclass(frozen=True)
class AIAnalysisResult:
    """One scored evidence submission from the AI classification service"""

    image_score: float
    credit_risk_score: float
    processed_at: Optional[datetime] = None
    yield_risk: Optional[float] = None


@dataclass(frozen=True)
class AIFindings:
    """Display-oriented metrics derived from one AIAnalysisResult"""

    crop_health: int
    authenticity: int
    maturity: int
    quality: int
    credit_impact_points: int


@dataclass(frozen=True)
class AIConfidenceInputs:
    avg_authenticity: float = 0.0
    avg_health: float = 0.0
    avg_practice_match: float = 0.0


@dataclass(frozen=True)
class CarbonPerformance:
    """Estimated emissions reduction and its 0-100 sub-score"""

    estimated_tco2e: float
    score: int
    raw_score: float
    rice_reduction: float
    agro_reduction: float
    plot_area_hectares: float = 0.0


@dataclass(frozen=True)
class MRVReliability:
    score: int
    raw_score: float
    ai_confidence: float


@dataclass(frozen=True)
class CreditProfile:
    """Composite record surfaced to the farmer"""

    credit_score: int
    carbon_performance: int
    mrv_reliability: int
    grade: Grade
    eligible_loan_amount: int
    monthly_change_delta: int = 0


@dataclass(frozen=True)
class ScoreHistoryPoint:
    date: str  # YYYY-MM
    score: int


@dataclass(frozen=True)
class CategoryInput:
    """Upstream-aggregated figures for one breakdown category"""

    raw_score: float
    impact_percent: float
    trend_label: str = ""


@dataclass(frozen=True)
class ScoreBreakdownEntry:
    category_key: str
    display_name: str
    icon: str
    raw_score: int
    impact_percent: float
    impact_tier: ImpactTier
    trend_label: str
    trend_direction: TrendDirection
    recognized: bool = True
    max_score: int = 100


@dataclass(frozen=True)
class Recommendation:
    category_key: str
    title: str
    description: str
    potential_impact: str


@dataclass
class ScoringResult:
    """Everything produced by one scoring run"""

    plot_area_hectares: float
    findings: List[AIFindings]
    confidence_inputs: AIConfidenceInputs
    carbon_performance: CarbonPerformance
    mrv_reliability: MRVReliability
    credit_profile: CreditProfile
    explanatory_grade: Grade
    breakdown: List[ScoreBreakdownEntry]
    recommendations: List[Recommendation]
    insights: List[str]
