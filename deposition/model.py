"""Core physical model helpers.

All quantities are CGS (cm, g, s, poise) unless the name says otherwise.
Functions accept floats or numpy arrays of particle quantities.
"""

import math

import numpy as np

GRAVITY_CM_S2 = 980.665
BOLTZMANN_ERG_K = 1.380649e-16
GAS_CONSTANT_J_MOL_K = 8.314462618
AIR_MOLAR_MASS_G_MOL = 28.964
PARTICLE_DENSITY_G_CM3 = 1.0

LAMINAR_REYNOLDS_LIMIT = 2000.0
TURBULENT_REYNOLDS_LIMIT = 4000.0


def compute_air_viscosity_poise(temperature_k: float) -> float:
    """Compute dynamic viscosity of air (Sutherland form) in poise."""

    return 1.708e-4 * ((temperature_k / 273.15) ** 1.5) * (393.396 / (temperature_k + 120.246))


def compute_air_density_g_cm3(pressure_kpa: float, temperature_k: float) -> float:
    """Compute air density from the ideal-gas law in g/cm^3."""

    density_kg_m3 = (pressure_kpa * 1000.0 * AIR_MOLAR_MASS_G_MOL / 1000.0) / (
        GAS_CONSTANT_J_MOL_K * temperature_k
    )
    return density_kg_m3 / 1000.0


def compute_mean_free_path_cm(pressure_kpa: float, temperature_k: float) -> float:
    """Compute the mean free path of air molecules in cm."""

    # 0.0665 um at 101.325 kPa and 293.15 K, Sutherland constant 110.4 K.
    mfp_um = 0.0665 * (101.325 / pressure_kpa) * (temperature_k / 293.15) * (
        (1.0 + 110.4 / 293.15) / (1.0 + 110.4 / temperature_k)
    )
    return mfp_um * 1e-4


def compute_flow_velocity_cm_s(flow_lpm: float, tube_diameter_cm: float) -> float:
    """Compute mean flow velocity in cm/s from L/min and tube diameter."""

    flow_cm3_s = flow_lpm * 1000.0 / 60.0
    return flow_cm3_s / (math.pi * tube_diameter_cm**2 / 4.0)


def compute_reynolds_number(
    density_g_cm3: float,
    velocity_cm_s: float,
    length_cm: float,
    viscosity_poise: float,
) -> float:
    return density_g_cm3 * velocity_cm_s * length_cm / viscosity_poise


def classify_flow_regime(reynolds: float) -> str:
    return "laminar" if reynolds < LAMINAR_REYNOLDS_LIMIT else "turbulent"


def compute_cunningham_factor(diameter_cm, mean_free_path_cm: float):
    """Compute the slip correction factor for particles of the given diameter."""

    ratio = mean_free_path_cm / diameter_cm
    return 1.0 + ratio * (2.34 + 1.05 * np.exp(-0.39 / ratio))


def compute_settling_velocity_cm_s(diameter_cm, cunningham, viscosity_poise: float):
    """Compute Stokes terminal settling velocity corrected for slip."""

    return PARTICLE_DENSITY_G_CM3 * diameter_cm**2 * GRAVITY_CM_S2 * cunningham / (18.0 * viscosity_poise)


def compute_particle_reynolds(settling_velocity_cm_s, diameter_cm, density_g_cm3: float, viscosity_poise: float):
    return density_g_cm3 * settling_velocity_cm_s * diameter_cm / viscosity_poise


def compute_stokes_number(settling_velocity_cm_s, velocity_cm_s: float, tube_diameter_cm: float):
    """Compute Stokes number from relaxation time (v_ts / g), flow velocity and tube diameter."""

    relaxation_time_s = settling_velocity_cm_s / GRAVITY_CM_S2
    return relaxation_time_s * velocity_cm_s / tube_diameter_cm


def compute_diffusion_coefficient_cm2_s(diameter_cm, cunningham, temperature_k: float, viscosity_poise: float):
    """Compute the Stokes-Einstein particle diffusion coefficient."""

    return BOLTZMANN_ERG_K * temperature_k * cunningham / (3.0 * math.pi * viscosity_poise * diameter_cm)


def compute_laminar_settling_efficiency(settling_velocity_cm_s, length_cm, tube_diameter_cm, velocity_cm_s, angle_rad):
    """Penetration against gravitational settling in laminar flow (Fuchs/Thomas)."""

    z = length_cm * settling_velocity_cm_s / (tube_diameter_cm * velocity_cm_s)
    eps = 0.75 * z * math.cos(angle_rad)
    eps_13 = np.cbrt(eps)
    # eps^(2/3) >= 1 means every particle reaches the wall.
    root = np.sqrt(np.clip(1.0 - eps_13**2, 0.0, None))
    arcsin = np.arcsin(np.clip(eps_13, 0.0, 1.0))
    fract = 1.0 - (2.0 / math.pi) * (2.0 * eps * root - eps_13 * root + arcsin)
    fract = np.where(eps_13**2 >= 1.0, 0.0, fract)
    return np.clip(fract, 0.0, 1.0)


def compute_turbulent_settling_efficiency(settling_velocity_cm_s, length_cm, tube_diameter_cm, velocity_cm_s, angle_rad):
    """Penetration against gravitational settling in well-mixed turbulent flow."""

    z = length_cm * settling_velocity_cm_s / (tube_diameter_cm * velocity_cm_s)
    return np.exp(-4.0 * z * math.cos(angle_rad) / math.pi)


def compute_laminar_diffusion_efficiency(diffusion_cm2_s, length_cm: float, flow_cm3_s: float):
    """Gormley-Kennedy penetration for laminar flow in a circular tube."""

    mu = diffusion_cm2_s * length_cm / flow_cm3_s
    # np.where evaluates both branches; the unused one is harmless for mu >= 0.
    small = 1.0 - 5.50 * mu ** (2.0 / 3.0) + 3.77 * mu
    large = 0.819 * np.exp(-11.5 * mu) + 0.0975 * np.exp(-70.1 * mu)
    return np.clip(np.where(mu < 0.009, small, large), 0.0, 1.0)


def compute_turbulent_diffusion_efficiency(
    diffusion_cm2_s,
    length_cm: float,
    tube_diameter_cm: float,
    flow_cm3_s: float,
    reynolds: float,
    viscosity_poise: float,
    density_g_cm3: float,
):
    """Penetration against turbulent diffusion using the Sherwood-number correlation."""

    schmidt = viscosity_poise / (density_g_cm3 * diffusion_cm2_s)
    sherwood = 0.0118 * reynolds**0.875 * schmidt ** (1.0 / 3.0)
    deposition_velocity = sherwood * diffusion_cm2_s / tube_diameter_cm
    return np.exp(-math.pi * tube_diameter_cm * length_cm * deposition_velocity / flow_cm3_s)


def compute_turbulent_inertial_efficiency(stokes, length_cm: float, tube_diameter_cm: float, reynolds: float):
    """Penetration against turbulent inertial deposition (dimensionless deposition velocity)."""

    tau_plus = 0.0395 * stokes * reynolds**0.75
    v_plus = np.minimum(6e-4 * tau_plus**2 + 2e-8 * reynolds, 0.1)
    # V_t / U = V+ / (5.03 Re^(1/8))
    velocity_ratio = v_plus / (5.03 * reynolds**0.125)
    return np.exp(-4.0 * velocity_ratio * length_cm / tube_diameter_cm)


def compute_calm_air_aspiration(stokes, settling_ratio, orientation_angle_rad: float):
    """Still-air probe aspiration: inertial term times gravity term along the probe axis."""

    inertial = np.exp(-4.0 * stokes ** (1.0 + np.sqrt(settling_ratio)) / (1.0 + 2.0 * stokes))
    gravity = 1.0 + settling_ratio * math.cos(orientation_angle_rad)
    return inertial * gravity
