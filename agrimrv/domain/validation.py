"""Caller-side declaration completeness checks, run before scoring"""

import math
from typing import Dict, Sequence
from agrimrv.domain.exceptions import IncompleteDeclarationError
from agrimrv.domain.models import FarmDeclaration, GeoPoint
from agrimrv.utils.numeric import finite_or_zero


def _valid_area(value) -> bool:
    """Blank counts as 0; only non-finite or negative numbers are rejected"""
    if value is None:
        return True
    return isinstance(value, (int, float)) and math.isfinite(value) and value >= 0


def validate_declaration(declaration: FarmDeclaration, plot_coordinates: Sequence[GeoPoint] = ()) -> None:
    """
    Reject declarations the farmer must complete before they can be scored.

    The scoring engine itself tolerates all of these (treating bad numbers as
    0); this check exists for flows that want a user-facing error instead.

    Raises:
        IncompleteDeclarationError: with a field -> message map
    """
    errors: Dict[str, str] = {}
    rice = declaration.rice_awd
    agro = declaration.agroforestry

    if not plot_coordinates:
        errors["plot_coordinates"] = "Please select a location on the map"
    if not _valid_area(rice.area_hectares):
        errors["rice_awd.area_hectares"] = "Enter valid area"
    if not _valid_area(agro.area_hectares):
        errors["agroforestry.area_hectares"] = "Enter valid area"
    if not _valid_area(agro.tree_density_per_hectare):
        errors["agroforestry.tree_density_per_hectare"] = "Enter valid tree density"

    rice_area = finite_or_zero(rice.area_hectares)
    agro_area = finite_or_zero(agro.area_hectares)

    if not errors and rice_area == 0 and agro_area == 0:
        errors["practices"] = "Declare at least one rice AWD or agroforestry area"
    if not errors and agro_area > 0:
        if finite_or_zero(agro.tree_density_per_hectare) == 0:
            errors["agroforestry.tree_density_per_hectare"] = "Tree density is required for agroforestry"
        if not agro.species:
            errors["agroforestry.species"] = "Select at least one tree species"
    if not errors and rice_area > 0 and rice.sowing_date is None:
        errors["rice_awd.sowing_date"] = "Sowing date is required"

    if errors:
        raise IncompleteDeclarationError(errors)
