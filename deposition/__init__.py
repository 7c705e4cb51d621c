"""Aerosol sampling-line transport efficiency package."""

from .distribution import build_distribution, build_distribution_from_inputs
from .efficiency import (
    BEND_MODELS,
    BendModel,
    ProbeOrientation,
    bend_eff,
    mcfarland_bend_model,
    probe_eff,
    pui_bend_model,
    resolve_bend_model,
    tube_eff,
    zhang_bend_model,
)
from .errors import (
    DepositionError,
    InvalidParameter,
    ModelDomainError,
    OrderingPrecondition,
    UnknownMethod,
    UnsupportedOperation,
)
from .params import DistributionInputs, SystemInputs, validate_distribution_inputs, validate_inputs
from .results import EfficiencySummary, MassLossBreakdown, mass_loss_breakdown, total_efficiency
from .solver import Bend, Element, Probe, SamplingLineResult, Tube, elements_from_frame, run_sampling_line
from .system import (
    SystemParameters,
    compute_particle_parameters,
    compute_system_parameters,
    compute_system_parameters_from_inputs,
)
from .table import DistributionKind, ParticleTable

__all__ = [
    "SystemInputs",
    "DistributionInputs",
    "validate_inputs",
    "validate_distribution_inputs",
    "DistributionKind",
    "ParticleTable",
    "build_distribution",
    "build_distribution_from_inputs",
    "SystemParameters",
    "compute_system_parameters",
    "compute_system_parameters_from_inputs",
    "compute_particle_parameters",
    "ProbeOrientation",
    "BendModel",
    "BEND_MODELS",
    "zhang_bend_model",
    "mcfarland_bend_model",
    "pui_bend_model",
    "resolve_bend_model",
    "probe_eff",
    "tube_eff",
    "bend_eff",
    "Probe",
    "Tube",
    "Bend",
    "Element",
    "SamplingLineResult",
    "elements_from_frame",
    "run_sampling_line",
    "EfficiencySummary",
    "MassLossBreakdown",
    "total_efficiency",
    "mass_loss_breakdown",
    "DepositionError",
    "InvalidParameter",
    "UnknownMethod",
    "ModelDomainError",
    "UnsupportedOperation",
    "OrderingPrecondition",
]
