"""Element efficiency models: probe inlet, straight tube and bend.

Each ``*_eff`` function evaluates one physical element for every record and
returns a new table with ``efficiency_<i>`` and ``cumulative_<i>`` appended.
"""

from collections.abc import Callable
from enum import Enum
import logging
import math

import numpy as np

from .errors import InvalidParameter, ModelDomainError, UnknownMethod
from .model import (
    compute_calm_air_aspiration,
    compute_laminar_diffusion_efficiency,
    compute_laminar_settling_efficiency,
    compute_turbulent_diffusion_efficiency,
    compute_turbulent_inertial_efficiency,
    compute_turbulent_settling_efficiency,
)
from .system import SystemParameters
from .table import ParticleTable

logger = logging.getLogger(__name__)

BendModel = Callable[[np.ndarray, float, float], np.ndarray]


class ProbeOrientation(str, Enum):
    UP = "up"
    DOWN = "down"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: "str | ProbeOrientation") -> "ProbeOrientation":
        if isinstance(value, ProbeOrientation):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.value[0]):
                return member
        raise InvalidParameter(f"Unsupported probe orientation: {value!r} (expected u, d or h)")

    @property
    def axis_angle_rad(self) -> float:
        """Angle between the inlet's facing direction and vertically up."""

        return {
            ProbeOrientation.UP: 0.0,
            ProbeOrientation.HORIZONTAL: math.pi / 2.0,
            ProbeOrientation.DOWN: math.pi,
        }[self]


def _check_system(table: ParticleTable, system: SystemParameters) -> None:
    if table.system is not None and table.system != system:
        raise InvalidParameter("system parameters differ from those used to compute particle parameters")


def _finalize(efficiency: np.ndarray, label: str) -> np.ndarray:
    efficiency = np.asarray(efficiency, dtype=float)
    if not np.all(np.isfinite(efficiency)):
        raise ModelDomainError(f"{label} produced non-finite efficiencies")
    return np.clip(efficiency, 0.0, 1.0)


def probe_eff(
    table: ParticleTable,
    system: SystemParameters,
    orientation: "str | ProbeOrientation",
    element_index: int,
) -> ParticleTable:
    """Still-air probe inlet efficiency (velocity ratio 1)."""

    orientation = ProbeOrientation.parse(orientation)
    _check_system(table, system)
    table.require_next_element(element_index)

    settling_ratio = table.column("settling_velocity_cm_s") / system.velocity_cm_s
    stokes = table.column("stokes")
    efficiency = _finalize(
        compute_calm_air_aspiration(stokes, settling_ratio, orientation.axis_angle_rad),
        "probe model",
    )
    logger.debug("Element %d: probe (%s)", element_index, orientation.value)
    return table.with_element(element_index, efficiency)


def tube_eff(
    table: ParticleTable,
    system: SystemParameters,
    length_m: float,
    angle_to_horizontal_deg: float,
    element_index: int,
) -> ParticleTable:
    """Straight-tube efficiency: settling, diffusion and turbulent inertial deposition."""

    errors: list[str] = []
    if length_m <= 0.0:
        errors.append("length_m must be > 0")
    if not (0.0 <= angle_to_horizontal_deg <= 90.0):
        errors.append("angle_to_horizontal_deg must be between 0 and 90")
    if errors:
        raise InvalidParameter("; ".join(errors))
    _check_system(table, system)
    table.require_next_element(element_index)

    length_cm = length_m * 100.0
    angle_rad = math.radians(angle_to_horizontal_deg)
    settling = table.column("settling_velocity_cm_s")
    diffusion = table.column("diffusion_cm2_s")

    if system.flow_regime == "laminar":
        eff_settling = compute_laminar_settling_efficiency(
            settling, length_cm, system.tube_diameter_cm, system.velocity_cm_s, angle_rad
        )
        eff_diffusion = compute_laminar_diffusion_efficiency(diffusion, length_cm, system.flow_cm3_s)
        eff_inertial = np.ones(len(table), dtype=float)
    else:
        if system.in_transition_band:
            logger.warning(
                "Tube Reynolds number %.0f is in the transition band; applying turbulent correlations",
                system.reynolds,
            )
        eff_settling = compute_turbulent_settling_efficiency(
            settling, length_cm, system.tube_diameter_cm, system.velocity_cm_s, angle_rad
        )
        eff_diffusion = compute_turbulent_diffusion_efficiency(
            diffusion,
            length_cm,
            system.tube_diameter_cm,
            system.flow_cm3_s,
            system.reynolds,
            system.viscosity_poise,
            system.air_density_g_cm3,
        )
        eff_inertial = compute_turbulent_inertial_efficiency(
            table.column("stokes"), length_cm, system.tube_diameter_cm, system.reynolds
        )

    efficiency = _finalize(eff_settling * eff_diffusion * eff_inertial, "tube model")
    logger.debug(
        "Element %d: tube L=%.4g m, angle=%.4g deg (%s)",
        element_index,
        length_m,
        angle_to_horizontal_deg,
        system.flow_regime,
    )
    return table.with_element(element_index, efficiency)


def zhang_bend_model(stokes: np.ndarray, curvature_ratio: float, angle_rad: float) -> np.ndarray:
    """Zhang et al. turbulent bend penetration, independent of curvature ratio.

    Fitted for turbulent flow only; ``bend_eff`` warns when it runs in laminar flow.
    """

    _ = curvature_ratio
    return np.exp(-0.528 * angle_rad * stokes)


def mcfarland_bend_model(stokes: np.ndarray, curvature_ratio: float, angle_rad: float) -> np.ndarray:
    """McFarland et al. (1997) bend penetration; the fit returns percent penetration."""

    r0 = curvature_ratio
    if not (2.0 <= r0 <= 30.0):
        logger.warning("McFarland bend correlation used with curvature ratio %.3g outside 2-30", r0)
    a = -0.9526 - 0.05686 * r0
    b = (-0.297 - 0.0174 * r0) / (1.0 - 0.07 * r0 + 0.0171 * r0**2)
    c = -0.306 + 1.895 / math.sqrt(r0) - 2.0 / r0
    d = (0.131 - 0.0132 * r0 + 0.000383 * r0**2) / (1.0 - 0.129 * r0 + 0.0136 * r0**2)

    numerator = 4.61 + a * angle_rad * stokes
    denominator = 1.0 + b * angle_rad * stokes + c * angle_rad * stokes**2 + d * angle_rad**2 * stokes
    pole = denominator <= 0.0
    # Past the pole with a negative numerator the fit tends to zero penetration.
    if np.any(pole & (numerator >= 0.0)):
        raise ModelDomainError(
            f"McFarland bend correlation has a non-positive denominator at Stokes numbers "
            f"where its numerator is still positive (curvature ratio {r0:.3g})"
        )
    n_pole = int(np.count_nonzero(pole))
    if n_pole:
        logger.warning(
            "McFarland bend correlation beyond its large-Stokes limit for %d sizes (R0=%.3g); penetration set to 0",
            n_pole,
            r0,
        )
    penetration = np.exp(numerator / np.where(pole, 1.0, denominator)) / 100.0
    return np.where(pole, 0.0, penetration)


def pui_bend_model(stokes: np.ndarray, curvature_ratio: float, angle_rad: float) -> np.ndarray:
    """Pui et al. (1987) turbulent bend penetration.

    The laminar-flow form of the same study is not implemented; ``bend_eff`` warns
    when this model runs in laminar flow.
    """

    _ = curvature_ratio
    return np.exp(-2.823 * stokes * angle_rad)


BEND_MODELS: dict[str, BendModel] = {
    "zhang": zhang_bend_model,
    "mcfarland": mcfarland_bend_model,
    "pui": pui_bend_model,
}

TURBULENT_BEND_MODELS = (zhang_bend_model, pui_bend_model)


def resolve_bend_model(method: "str | BendModel") -> BendModel:
    if callable(method):
        return method
    model = BEND_MODELS.get(str(method).strip().lower())
    if model is None:
        raise UnknownMethod(f"Unknown bend method: {method!r} (expected Zhang, McFarland or Pui)")
    return model


def bend_eff(
    table: ParticleTable,
    system: SystemParameters,
    method: "str | BendModel",
    bend_angle_deg: float,
    bend_radius_m: float,
    element_index: int,
) -> ParticleTable:
    """Bend efficiency from Stokes number, curvature ratio and bend angle."""

    model = resolve_bend_model(method)
    errors: list[str] = []
    if not (0.0 < bend_angle_deg <= 180.0):
        errors.append("bend_angle_deg must be in (0, 180]")
    if bend_radius_m <= 0.0:
        errors.append("bend_radius_m must be > 0")
    if errors:
        raise InvalidParameter("; ".join(errors))
    _check_system(table, system)
    table.require_next_element(element_index)

    curvature_ratio = (bend_radius_m * 100.0) / system.tube_diameter_cm
    if system.flow_regime == "laminar" and model in TURBULENT_BEND_MODELS:
        logger.warning(
            "Bend model %s is fitted for turbulent flow but tube Reynolds number is %.0f (laminar)",
            model.__name__,
            system.reynolds,
        )
    efficiency = _finalize(
        model(table.column("stokes"), curvature_ratio, math.radians(bend_angle_deg)),
        "bend model",
    )
    logger.debug(
        "Element %d: bend %.4g deg, R0=%.4g (%s)",
        element_index,
        bend_angle_deg,
        curvature_ratio,
        getattr(model, "__name__", "custom"),
    )
    return table.with_element(element_index, efficiency)
