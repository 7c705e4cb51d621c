"""Sampling-line runner: applies elements to a particle table in transport order."""

from dataclasses import dataclass, field
import logging
import math
from typing import Any

import pandas as pd

from .distribution import build_distribution_from_inputs
from .efficiency import BendModel, ProbeOrientation, bend_eff, probe_eff, tube_eff
from .errors import InvalidParameter
from .params import DistributionInputs, SystemInputs
from .system import SystemParameters, compute_particle_parameters, compute_system_parameters_from_inputs
from .table import ParticleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Probe:
    index: int
    orientation: ProbeOrientation = ProbeOrientation.UP


@dataclass(frozen=True, slots=True)
class Tube:
    index: int
    length_cm: float
    angle_to_horizontal_deg: float = 0.0


@dataclass(frozen=True, slots=True)
class Bend:
    index: int
    bend_angle_deg: float
    bend_radius_cm: float


Element = Probe | Tube | Bend


@dataclass(frozen=True, slots=True, eq=False)
class SamplingLineResult:
    table: ParticleTable
    system: SystemParameters
    metadata: dict[str, Any] = field(default_factory=dict)


def _required(row: pd.Series, name: str, index: int) -> float:
    value = row.get(name)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        raise InvalidParameter(f"element {index}: column '{name}' is required")
    return float(value)


def elements_from_frame(frame: pd.DataFrame) -> list[Element]:
    """Convert a parsed element table into element records sorted by index."""

    elements: list[Element] = []
    for _, row in frame.iterrows():
        index = int(row["index"])
        kind = str(row["kind"]).strip().lower()
        if kind == "probe":
            elements.append(Probe(index=index, orientation=ProbeOrientation.parse(row.get("orientation"))))
        elif kind == "tube":
            elements.append(
                Tube(
                    index=index,
                    length_cm=_required(row, "length_cm", index),
                    angle_to_horizontal_deg=_required(row, "angle_to_horizontal", index),
                )
            )
        elif kind == "bend":
            elements.append(
                Bend(
                    index=index,
                    bend_angle_deg=_required(row, "bend_angle", index),
                    bend_radius_cm=_required(row, "bend_radius_cm", index),
                )
            )
        else:
            raise InvalidParameter(f"element {index}: unsupported element kind {row['kind']!r}")
    return sorted(elements, key=lambda element: element.index)


def apply_element(
    table: ParticleTable,
    system: SystemParameters,
    element: Element,
    bend_method: "str | BendModel" = "Zhang",
) -> ParticleTable:
    """Apply one element; lengths and radii are converted from cm to m."""

    if isinstance(element, Probe):
        return probe_eff(table, system, element.orientation, element_index=element.index)
    if isinstance(element, Tube):
        return tube_eff(
            table,
            system,
            length_m=element.length_cm / 100.0,
            angle_to_horizontal_deg=element.angle_to_horizontal_deg,
            element_index=element.index,
        )
    if isinstance(element, Bend):
        return bend_eff(
            table,
            system,
            method=bend_method,
            bend_angle_deg=element.bend_angle_deg,
            bend_radius_m=element.bend_radius_cm / 100.0,
            element_index=element.index,
        )
    raise InvalidParameter(f"Unsupported element: {element!r}")


def run_sampling_line(
    inputs: SystemInputs,
    elements: list[Element],
    bend_method: "str | BendModel" = "Zhang",
    distribution: DistributionInputs = DistributionInputs(),
) -> SamplingLineResult:
    """Build the distribution and apply every element in index order."""

    system = compute_system_parameters_from_inputs(inputs)
    table = compute_particle_parameters(build_distribution_from_inputs(distribution), system)

    ordered = sorted(elements, key=lambda element: element.index)
    for element in ordered:
        table = apply_element(table, system, element, bend_method=bend_method)

    metadata: dict[str, Any] = {
        "n_elements": len(ordered),
        "element_kinds": [type(element).__name__.lower() for element in ordered],
        "bend_method": bend_method if isinstance(bend_method, str) else getattr(bend_method, "__name__", "custom"),
        "flow_regime": system.flow_regime,
        "reynolds": system.reynolds,
        "n_records": len(table),
    }
    logger.info("Processed %d elements for %d particle sizes", len(ordered), len(table))
    return SamplingLineResult(table=table, system=system, metadata=metadata)
