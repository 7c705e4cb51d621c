"""Report aggregation over a processed particle table."""

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from .errors import UnsupportedOperation
from .table import DistributionKind, ParticleTable


@dataclass(frozen=True, slots=True, eq=False)
class EfficiencySummary:
    particle_class: DistributionKind
    efficiency: float
    per_size: pd.Series
    context: dict[str, Any]


@dataclass(frozen=True, slots=True, eq=False)
class MassLossBreakdown:
    frame: pd.DataFrame
    total_frac_lost: float


def _context(table: ParticleTable) -> dict[str, Any]:
    context: dict[str, Any] = {
        "diameter_units": "um (aerodynamic)",
        "efficiency_units": "fraction",
        "n_elements": len(table.elements),
        "velocity_ratio": 1.0,
    }
    if table.system is not None:
        context.update(
            {
                "tube_diameter_cm": table.system.tube_diameter_cm,
                "flow_lpm": table.system.flow_lpm,
                "temperature_c": table.system.temperature_c,
                "pressure_kpa": table.system.pressure_kpa,
                "reynolds": table.system.reynolds,
                "flow_regime": table.system.flow_regime,
            }
        )
    return context


def total_efficiency(table: ParticleTable, particle_class: "str | DistributionKind") -> EfficiencySummary:
    """Summarise final cumulative efficiency for one particle class.

    Discrete sizes are averaged; the continuous distribution is mass weighted
    (density * d^3).
    """

    try:
        kind = DistributionKind(particle_class)
    except ValueError as exc:
        raise UnsupportedOperation(f"Unknown particle class: {particle_class!r}") from exc

    mask = table.mask(kind)
    if not np.any(mask):
        raise UnsupportedOperation(f"Record set has no {kind.value} entries")

    diameter = table.column("diameter_um")[mask]
    final = table.final_cumulative[mask]
    per_size = pd.Series(final, index=pd.Index(diameter, name="diameter_um"), name="efficiency")

    if kind is DistributionKind.DISCRETE:
        efficiency = float(np.mean(final))
    else:
        weight = table.column("probability_density")[mask] * diameter**3
        efficiency = float(np.sum(weight * final) / np.sum(weight))

    return EfficiencySummary(
        particle_class=kind,
        efficiency=efficiency,
        per_size=per_size,
        context=_context(table),
    )


def mass_loss_breakdown(table: ParticleTable) -> MassLossBreakdown:
    """Per-bin ambient/sampled mass and losses for the continuous distribution."""

    mask = table.mask(DistributionKind.CONTINUOUS)
    if not np.any(mask):
        raise UnsupportedOperation("mass_loss_breakdown requires continuous distribution entries")

    diameter = table.column("diameter_um")[mask]
    ambient = table.column("probability_density")[mask] * diameter**3
    sampled = ambient * table.final_cumulative[mask]
    total_ambient = float(np.sum(ambient))

    with np.errstate(divide="ignore", invalid="ignore"):
        bin_frac_lost = np.where(ambient > 0.0, 1.0 - sampled / ambient, 0.0)
    frame = pd.DataFrame(
        {
            "diameter_um": diameter,
            "ambient_mass": ambient,
            "sampled_mass": sampled,
            "bin_frac_lost": bin_frac_lost,
            "frac_of_total_lost": (ambient - sampled) / total_ambient,
        }
    )
    total_frac_lost = 1.0 - float(np.sum(sampled)) / total_ambient
    return MassLossBreakdown(frame=frame, total_frac_lost=total_frac_lost)
