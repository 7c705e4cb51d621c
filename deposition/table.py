"""Particle record table with append-only efficiency columns."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from .errors import OrderingPrecondition

if TYPE_CHECKING:
    from .system import SystemParameters

DERIVED_COLUMNS = (
    "cunningham",
    "settling_velocity_cm_s",
    "particle_reynolds",
    "stokes",
    "diffusion_cm2_s",
)


class DistributionKind(str, Enum):
    CONTINUOUS = "continuous"
    DISCRETE = "discrete"


def efficiency_column(index: int) -> str:
    return f"efficiency_{index}"


def cumulative_column(index: int) -> str:
    return f"cumulative_{index}"


@dataclass(frozen=True, slots=True, eq=False)
class ParticleTable:
    """One row per modelled particle size.

    Every ``with_*`` method returns a new table; existing columns are never
    overwritten. ``elements`` lists the processed element indices in
    transport order.
    """

    frame: pd.DataFrame
    system: "SystemParameters | None" = None
    elements: tuple[int, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def has_particle_parameters(self) -> bool:
        return all(column in self.frame.columns for column in DERIVED_COLUMNS)

    @property
    def final_cumulative(self) -> np.ndarray:
        """Cumulative efficiency after the last processed element (ones when none)."""

        if not self.elements:
            return np.ones(len(self.frame), dtype=float)
        return self.frame[cumulative_column(self.elements[-1])].to_numpy(dtype=float)

    def mask(self, kind: DistributionKind) -> np.ndarray:
        return (self.frame["kind"] == kind.value).to_numpy()

    def column(self, name: str) -> np.ndarray:
        return self.frame[name].to_numpy(dtype=float)

    def to_frame(self) -> pd.DataFrame:
        return self.frame.copy()

    def with_particle_parameters(
        self,
        system: "SystemParameters",
        derived: dict[str, np.ndarray],
    ) -> "ParticleTable":
        """Attach derived physical fields; re-attaching is allowed only with identical values."""

        if self.has_particle_parameters:
            same = all(np.array_equal(self.column(name), derived[name]) for name in DERIVED_COLUMNS)
            if not same or self.system != system:
                raise OrderingPrecondition(
                    "particle parameters already computed with different system parameters"
                )
            return self
        if self.elements:
            raise OrderingPrecondition("particle parameters must be computed before any element")

        frame = self.frame.copy()
        for name in DERIVED_COLUMNS:
            frame[name] = derived[name]
        return replace(self, frame=frame, system=system)

    def require_next_element(self, index: int) -> None:
        """Raise unless ``index`` directly follows the processed elements."""

        if not self.has_particle_parameters:
            raise OrderingPrecondition("particle parameters must be computed before element efficiencies")
        if efficiency_column(index) in self.frame.columns:
            raise OrderingPrecondition(f"element {index} has already been processed")
        expected = len(self.elements) + 1
        if index != expected:
            missing = cumulative_column(index - 1) if index > expected else "none"
            raise OrderingPrecondition(
                f"element {index} processed out of order: expected element {expected} "
                f"(missing predecessor column: {missing})"
            )

    def with_element(self, index: int, efficiency: np.ndarray) -> "ParticleTable":
        """Append efficiency and cumulative efficiency columns for one element."""

        self.require_next_element(index)
        efficiency = np.asarray(efficiency, dtype=float)
        cumulative = self.final_cumulative * efficiency

        frame = self.frame.copy()
        frame[efficiency_column(index)] = efficiency
        frame[cumulative_column(index)] = cumulative
        return replace(self, frame=frame, elements=self.elements + (index,))
