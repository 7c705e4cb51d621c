import numpy as np
import pytest

from deposition.distribution import build_distribution
from deposition.efficiency import bend_eff, probe_eff, tube_eff
from deposition.errors import UnsupportedOperation
from deposition.results import mass_loss_breakdown, total_efficiency
from deposition.system import compute_particle_parameters, compute_system_parameters
from deposition.table import DistributionKind, ParticleTable


def _processed_table() -> ParticleTable:
    system = compute_system_parameters(2.21, 56.6, 25.0, 101.325)
    table = compute_particle_parameters(build_distribution(), system)
    table = probe_eff(table, system, "u", element_index=1)
    table = tube_eff(table, system, 1.1176, 0.0, 2)
    table = bend_eff(table, system, "Zhang", 90.0, 0.127, 3)
    return tube_eff(table, system, 0.5, 90.0, 4)


def test_discrete_total_efficiency_is_mean_of_final_cumulative() -> None:
    table = _processed_table()
    summary = total_efficiency(table, "discrete")
    mask = table.mask(DistributionKind.DISCRETE)
    assert summary.particle_class is DistributionKind.DISCRETE
    assert abs(summary.efficiency - np.mean(table.final_cumulative[mask])) < 1e-12
    assert list(summary.per_size.index) == [1.0, 5.0, 10.0]
    assert summary.per_size.loc[1.0] >= summary.per_size.loc[10.0]


def test_continuous_total_efficiency_is_mass_weighted() -> None:
    table = _processed_table()
    summary = total_efficiency(table, DistributionKind.CONTINUOUS)
    breakdown = mass_loss_breakdown(table)
    assert 0.0 <= summary.efficiency <= 1.0
    assert abs(summary.efficiency - (1.0 - breakdown.total_frac_lost)) < 1e-12
    assert len(summary.per_size) == 1000


def test_total_efficiency_context_describes_flow() -> None:
    summary = total_efficiency(_processed_table(), "continuous")
    assert summary.context["flow_lpm"] == 56.6
    assert summary.context["tube_diameter_cm"] == 2.21
    assert summary.context["n_elements"] == 4
    assert summary.context["flow_regime"] == "turbulent"


def test_total_efficiency_without_elements_is_one() -> None:
    system = compute_system_parameters(2.21, 56.6, 25.0, 101.325)
    table = compute_particle_parameters(build_distribution(), system)
    assert total_efficiency(table, "discrete").efficiency == 1.0


def test_total_efficiency_rejects_missing_class() -> None:
    table = build_distribution(discrete_sizes=())
    with pytest.raises(UnsupportedOperation):
        total_efficiency(table, "discrete")
    with pytest.raises(UnsupportedOperation):
        total_efficiency(table, "log")


def test_mass_loss_bin_losses_sum_to_total() -> None:
    breakdown = mass_loss_breakdown(_processed_table())
    frame = breakdown.frame
    weighted = np.sum(frame["bin_frac_lost"] * frame["ambient_mass"]) / np.sum(frame["ambient_mass"])
    assert abs(weighted - breakdown.total_frac_lost) < 1e-12
    assert abs(frame["frac_of_total_lost"].sum() - breakdown.total_frac_lost) < 1e-12
    assert np.all(frame["sampled_mass"] <= frame["ambient_mass"])
    assert 0.0 < breakdown.total_frac_lost < 1.0


def test_mass_loss_requires_continuous_entries() -> None:
    table = build_distribution()
    discrete_only = ParticleTable(
        frame=table.frame[table.mask(DistributionKind.DISCRETE)].reset_index(drop=True)
    )
    with pytest.raises(UnsupportedOperation):
        mass_loss_breakdown(discrete_only)
