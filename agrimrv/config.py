"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from agrimrv.domain.calibration import (
    Calibration,
    CarbonCalibration,
    CompositeWeights,
    FindingsCalibration,
    MRVWeights,
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./agrimrv.db"

    # External Services
    ai_service_base: str = "http://localhost:8001"

    # Service
    service_name: str = "agrimrv-scoring"
    log_level: str = "INFO"
    history_months: int = 6

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # AI findings calibration
    findings_authenticity_offset: float = 80.0
    findings_authenticity_divisor: float = 5.0
    findings_maturity_offset: float = 70.0
    findings_maturity_divisor: float = 4.0
    findings_quality_offset: float = 75.0
    findings_quality_divisor: float = 5.0
    findings_credit_impact_divisor: float = 6.0
    findings_credit_impact_floor: int = 5
    findings_verified_below_risk: float = 30.0
    findings_review_below_risk: float = 60.0

    # Carbon performance calibration
    carbon_rice_emission_factor: float = 0.85
    carbon_rice_uplift: float = 1.1
    carbon_agro_uplift: float = 1.1
    carbon_agro_sequestration_per_tree: float = 0.02
    carbon_rice_weight: float = 0.6
    carbon_agro_weight: float = 0.4
    carbon_max_reduction_tco2e: float = 3.0  # 0-100 normalizer

    # MRV reliability weights
    mrv_authenticity_weight: float = 0.5
    mrv_health_weight: float = 0.3
    mrv_practice_match_weight: float = 0.2
    mrv_ai_confidence_weight: float = 0.4
    mrv_verification_history_weight: float = 0.3
    mrv_document_quality_weight: float = 0.2
    mrv_consistency_weight: float = 0.1

    # Composite weights
    composite_carbon_weight: float = 0.7
    composite_mrv_weight: float = 0.3


settings = Settings()


def calibration_from_settings(config: Settings = settings) -> Calibration:
    """Build the scoring engine calibration from configured values"""
    return Calibration(
        findings=FindingsCalibration(
            authenticity_offset=config.findings_authenticity_offset,
            authenticity_divisor=config.findings_authenticity_divisor,
            maturity_offset=config.findings_maturity_offset,
            maturity_divisor=config.findings_maturity_divisor,
            quality_offset=config.findings_quality_offset,
            quality_divisor=config.findings_quality_divisor,
            credit_impact_divisor=config.findings_credit_impact_divisor,
            credit_impact_floor=config.findings_credit_impact_floor,
            verified_below_risk=config.findings_verified_below_risk,
            review_below_risk=config.findings_review_below_risk,
        ),
        carbon=CarbonCalibration(
            rice_emission_factor=config.carbon_rice_emission_factor,
            rice_uplift=config.carbon_rice_uplift,
            agro_uplift=config.carbon_agro_uplift,
            agro_sequestration_per_tree=config.carbon_agro_sequestration_per_tree,
            rice_weight=config.carbon_rice_weight,
            agro_weight=config.carbon_agro_weight,
            max_reduction_tco2e=config.carbon_max_reduction_tco2e,
        ),
        mrv=MRVWeights(
            authenticity=config.mrv_authenticity_weight,
            health=config.mrv_health_weight,
            practice_match=config.mrv_practice_match_weight,
            ai_confidence=config.mrv_ai_confidence_weight,
            verification_history=config.mrv_verification_history_weight,
            document_quality=config.mrv_document_quality_weight,
            consistency=config.mrv_consistency_weight,
        ),
        composite=CompositeWeights(
            carbon_performance=config.composite_carbon_weight,
            mrv_reliability=config.composite_mrv_weight,
        ),
    )
