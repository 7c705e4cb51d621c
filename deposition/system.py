"""Flow and particle parameter derivation."""

from dataclasses import dataclass
import logging

import numpy as np

from .model import (
    TURBULENT_REYNOLDS_LIMIT,
    classify_flow_regime,
    compute_air_density_g_cm3,
    compute_air_viscosity_poise,
    compute_cunningham_factor,
    compute_diffusion_coefficient_cm2_s,
    compute_flow_velocity_cm_s,
    compute_mean_free_path_cm,
    compute_particle_reynolds,
    compute_reynolds_number,
    compute_settling_velocity_cm_s,
    compute_stokes_number,
)
from .params import SystemInputs, validate_inputs
from .table import ParticleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SystemParameters:
    tube_diameter_cm: float
    flow_lpm: float
    temperature_c: float
    pressure_kpa: float
    temperature_k: float
    viscosity_poise: float
    air_density_g_cm3: float
    mean_free_path_cm: float
    velocity_cm_s: float
    reynolds: float
    flow_regime: str

    @property
    def flow_cm3_s(self) -> float:
        return self.flow_lpm * 1000.0 / 60.0

    @property
    def in_transition_band(self) -> bool:
        return self.flow_regime == "turbulent" and self.reynolds < TURBULENT_REYNOLDS_LIMIT


def compute_system_parameters(
    tube_diameter_cm: float,
    flow_lpm: float,
    temperature_c: float,
    pressure_kpa: float,
) -> SystemParameters:
    """Derive particle-independent air and flow quantities for one run."""

    return compute_system_parameters_from_inputs(
        SystemInputs(
            tube_diameter_cm=tube_diameter_cm,
            flow_lpm=flow_lpm,
            temperature_c=temperature_c,
            pressure_kpa=pressure_kpa,
        )
    )


def compute_system_parameters_from_inputs(inputs: SystemInputs) -> SystemParameters:
    validate_inputs(inputs)

    temperature_k = inputs.temperature_c + 273.15
    viscosity = compute_air_viscosity_poise(temperature_k)
    density = compute_air_density_g_cm3(inputs.pressure_kpa, temperature_k)
    velocity = compute_flow_velocity_cm_s(inputs.flow_lpm, inputs.tube_diameter_cm)
    reynolds = compute_reynolds_number(density, velocity, inputs.tube_diameter_cm, viscosity)

    params = SystemParameters(
        tube_diameter_cm=inputs.tube_diameter_cm,
        flow_lpm=inputs.flow_lpm,
        temperature_c=inputs.temperature_c,
        pressure_kpa=inputs.pressure_kpa,
        temperature_k=temperature_k,
        viscosity_poise=viscosity,
        air_density_g_cm3=density,
        mean_free_path_cm=compute_mean_free_path_cm(inputs.pressure_kpa, temperature_k),
        velocity_cm_s=velocity,
        reynolds=reynolds,
        flow_regime=classify_flow_regime(reynolds),
    )
    logger.info(
        "System parameters: U=%.4g cm/s, Re=%.4g (%s)",
        params.velocity_cm_s,
        params.reynolds,
        params.flow_regime,
    )
    return params


def compute_particle_parameters(table: ParticleTable, system: SystemParameters) -> ParticleTable:
    """Attach Cunningham factor, settling velocity, particle Reynolds number, Stokes number and diffusivity."""

    diameter_cm = table.column("diameter_um") * 1e-4
    cunningham = compute_cunningham_factor(diameter_cm, system.mean_free_path_cm)
    settling = compute_settling_velocity_cm_s(diameter_cm, cunningham, system.viscosity_poise)
    derived = {
        "cunningham": cunningham,
        "settling_velocity_cm_s": settling,
        "particle_reynolds": compute_particle_reynolds(
            settling, diameter_cm, system.air_density_g_cm3, system.viscosity_poise
        ),
        "stokes": compute_stokes_number(settling, system.velocity_cm_s, system.tube_diameter_cm),
        "diffusion_cm2_s": compute_diffusion_coefficient_cm2_s(
            diameter_cm, cunningham, system.temperature_k, system.viscosity_poise
        ),
    }

    n_outside_stokes = int(np.count_nonzero(derived["particle_reynolds"] > 1.0))
    if n_outside_stokes:
        logger.warning(
            "%d particle sizes have particle Reynolds number > 1; Stokes settling overestimates their velocity",
            n_outside_stokes,
        )
    return table.with_particle_parameters(system, derived)
