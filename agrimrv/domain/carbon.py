"""Carbon Performance sub-score from declared practices"""

from agrimrv.domain.calibration import CarbonCalibration
from agrimrv.domain.models import CarbonPerformance, FarmDeclaration
from agrimrv.utils.numeric import clamp, finite_or_zero, round_half_up


def compute_carbon_performance(
    declaration: FarmDeclaration,
    calibration: CarbonCalibration = CarbonCalibration(),
    plot_area_hectares: float = 0.0,
) -> CarbonPerformance:
    """
    Estimate tCO2e reduction from rice AWD and agroforestry, scaled to 0-100.

    Scoring weights:
    - 60%: rice AWD reduction (area x emission factor x uplift)
    - 40%: agroforestry sequestration (area x tree density x uplift x per-tree rate)

    The 0-100 scale divides by an assumed maximum reduction. Farms above that
    calibration exceed 100 before the clamp absorbs the excess.
    """
    c = calibration
    rice_area = finite_or_zero(declaration.rice_awd.area_hectares)
    agro_area = finite_or_zero(declaration.agroforestry.area_hectares)
    tree_density = finite_or_zero(declaration.agroforestry.tree_density_per_hectare)

    rice_reduction = rice_area * c.rice_emission_factor * c.rice_uplift
    agro_reduction = agro_area * tree_density * c.agro_uplift * c.agro_sequestration_per_tree
    estimated = rice_reduction * c.rice_weight + agro_reduction * c.agro_weight

    raw_score = clamp(estimated / c.max_reduction_tco2e * 100)

    return CarbonPerformance(
        estimated_tco2e=max(estimated, 0.0),
        score=round_half_up(raw_score),
        raw_score=raw_score,
        rice_reduction=rice_reduction,
        agro_reduction=agro_reduction,
        plot_area_hectares=finite_or_zero(plot_area_hectares),
    )
