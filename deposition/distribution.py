"""Particle-size distribution builder."""

from collections.abc import Sequence
import logging
import math

import numpy as np
import pandas as pd

from .params import DistributionInputs, validate_distribution_inputs
from .table import DistributionKind, ParticleTable

logger = logging.getLogger(__name__)

# Grid spans amad * gsd**(+/-TAIL_SIGMAS).
TAIL_SIGMAS = 4.0


def lognormal_density(diameter_um: np.ndarray, amad_um: float, gsd: float) -> np.ndarray:
    """Log-normal probability density with respect to ln(d)."""

    ln_gsd = math.log(gsd)
    z = (np.log(diameter_um) - math.log(amad_um)) / ln_gsd
    return np.exp(-0.5 * z**2) / (math.sqrt(2.0 * math.pi) * ln_gsd)


def build_distribution(
    amad: float = 5.0,
    gsd: float = 2.5,
    n: int = 1000,
    discrete_sizes: Sequence[float] = (1.0, 5.0, 10.0),
) -> ParticleTable:
    """Build ``n`` log-spaced continuous records followed by the discrete reference sizes."""

    inputs = DistributionInputs(
        amad_um=amad,
        gsd=gsd,
        n_bins=n,
        discrete_sizes_um=tuple(float(size) for size in discrete_sizes),
    )
    return build_distribution_from_inputs(inputs)


def build_distribution_from_inputs(inputs: DistributionInputs) -> ParticleTable:
    validate_distribution_inputs(inputs)

    span = TAIL_SIGMAS * math.log10(inputs.gsd)
    center = math.log10(inputs.amad_um)
    if inputs.n_bins == 1:
        continuous_d = np.array([inputs.amad_um], dtype=float)
    else:
        continuous_d = np.logspace(center - span, center + span, inputs.n_bins)
    discrete_d = np.asarray(inputs.discrete_sizes_um, dtype=float)

    continuous = pd.DataFrame(
        {
            "diameter_um": continuous_d,
            "kind": DistributionKind.CONTINUOUS.value,
            "probability_density": lognormal_density(continuous_d, inputs.amad_um, inputs.gsd),
        }
    )
    frames = [continuous]
    if len(discrete_d):
        frames.append(
            pd.DataFrame(
                {
                    "diameter_um": discrete_d,
                    "kind": DistributionKind.DISCRETE.value,
                    "probability_density": np.full(len(discrete_d), np.nan),
                }
            )
        )
    frame = pd.concat(frames, ignore_index=True)
    logger.debug(
        "Built distribution: %d continuous bins (%.4g-%.4g um), %d discrete sizes",
        len(continuous_d),
        continuous_d[0],
        continuous_d[-1],
        len(discrete_d),
    )
    return ParticleTable(frame=frame)
