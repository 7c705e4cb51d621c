"""Input schema and validation for the sampling-line model."""

from dataclasses import dataclass

from .errors import InvalidParameter

ABSOLUTE_ZERO_C = -273.15


@dataclass(frozen=True, slots=True)
class SystemInputs:
    tube_diameter_cm: float
    flow_lpm: float
    temperature_c: float = 25.0
    pressure_kpa: float = 101.325


@dataclass(frozen=True, slots=True)
class DistributionInputs:
    amad_um: float = 5.0
    gsd: float = 2.5
    n_bins: int = 1000
    discrete_sizes_um: tuple[float, ...] = (1.0, 5.0, 10.0)


def validate_inputs(inputs: SystemInputs) -> None:
    """Validate flow/environment inputs and raise InvalidParameter on failures."""

    errors: list[str] = []

    if inputs.tube_diameter_cm <= 0.0:
        errors.append("tube_diameter_cm must be > 0")
    if inputs.flow_lpm <= 0.0:
        errors.append("flow_lpm must be > 0")
    if inputs.pressure_kpa <= 0.0:
        errors.append("pressure_kpa must be > 0")
    if inputs.temperature_c <= ABSOLUTE_ZERO_C:
        errors.append("temperature_c must be above absolute zero")

    if errors:
        raise InvalidParameter("; ".join(errors))


def validate_distribution_inputs(inputs: DistributionInputs) -> None:
    """Validate particle-size distribution inputs and raise InvalidParameter on failures."""

    errors: list[str] = []

    if inputs.amad_um <= 0.0:
        errors.append("amad_um must be > 0")
    if inputs.gsd <= 1.0:
        errors.append("gsd must be > 1")
    if inputs.n_bins < 1:
        errors.append("n_bins must be >= 1")
    if any(size <= 0.0 for size in inputs.discrete_sizes_um):
        errors.append("discrete_sizes_um must all be > 0")

    if errors:
        raise InvalidParameter("; ".join(errors))
