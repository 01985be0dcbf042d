"""
Calibration constants for the scoring engine.

The values reproduce the behavior of the mobile client verbatim. They are
empirical, not derived from a carbon-accounting model, and can be retuned via
Settings without touching the calculators.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FindingsCalibration:
    authenticity_offset: float = 80.0
    authenticity_divisor: float = 5.0
    maturity_offset: float = 70.0
    maturity_divisor: float = 4.0
    quality_offset: float = 75.0
    quality_divisor: float = 5.0
    credit_impact_divisor: float = 6.0
    credit_impact_floor: int = 5
    # yield risk thresholds for verification status
    verified_below_risk: float = 30.0
    review_below_risk: float = 60.0


@dataclass(frozen=True)
class CarbonCalibration:
    rice_emission_factor: float = 0.85
    rice_uplift: float = 1.1
    agro_uplift: float = 1.1
    agro_sequestration_per_tree: float = 0.02
    rice_weight: float = 0.6
    agro_weight: float = 0.4
    # assumed maximum achievable reduction (tCO2e) used to normalize to 0-100
    max_reduction_tco2e: float = 3.0


@dataclass(frozen=True)
class MRVWeights:
    authenticity: float = 0.5
    health: float = 0.3
    practice_match: float = 0.2
    ai_confidence: float = 0.4
    verification_history: float = 0.3
    document_quality: float = 0.2
    consistency: float = 0.1


@dataclass(frozen=True)
class CompositeWeights:
    carbon_performance: float = 0.7
    mrv_reliability: float = 0.3


@dataclass(frozen=True)
class Calibration:
    findings: FindingsCalibration = FindingsCalibration()
    carbon: CarbonCalibration = CarbonCalibration()
    mrv: MRVWeights = MRVWeights()
    composite: CompositeWeights = CompositeWeights()


DEFAULT_CALIBRATION = Calibration()
