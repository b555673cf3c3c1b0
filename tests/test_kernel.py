"""
Tests for the biophysical estimator.

Covers each arithmetic stage in isolation, the classification order,
the unstable-regime clamp and the reference scenarios.
"""

import json
import math

import pytest

from rna_navigator import kernel
from rna_navigator.exceptions import InvalidInput, UnstableRegime
from rna_navigator.models import AUDIT_KEYS, EfficiencyLabel


def numeric_fields(result):
    d = result.to_dict()
    d.pop("timestamp")
    return d


class TestStages:

    def test_stacking_interpolates_between_au_and_gc(self):
        assert kernel.stacking_stability(0.0) == pytest.approx(12.2)
        assert kernel.stacking_stability(1.0) == pytest.approx(22.5)

    def test_hill_saturation_half_point(self):
        assert kernel.hill_saturation(kernel.K_HALF_MG) == pytest.approx(0.5)

    def test_hill_saturation_zero_and_negative(self):
        assert kernel.hill_saturation(0.0) == 0.0
        assert kernel.hill_saturation(-3.0) == 0.0

    def test_ion_inhibition_piecewise(self):
        assert kernel.ion_inhibition(0.0) == 1.0
        assert kernel.ion_inhibition(30.0) == 1.0
        assert kernel.ion_inhibition(30.001) < 1.0
        assert kernel.ion_inhibition(40.0) == pytest.approx(1 / 1.5)

    def test_ion_inhibition_continuous_at_onset(self):
        assert kernel.ion_inhibition(30.0 + 1e-9) == pytest.approx(1.0, abs=1e-9)

    def test_warp_factor_at_threshold_is_one(self):
        assert kernel.warp_factor(kernel.SYNC_THRESHOLD) == 1.0
        assert kernel.warp_factor(0.0) == 1.0

    def test_warp_factor_just_above_threshold(self):
        assert kernel.warp_factor(kernel.SYNC_THRESHOLD + 1e-9) > 1.0

    def test_warp_factor_exponent(self):
        """((0.8 - 0.7) * 20 + 1) ** 3.5 = 3 ** 3.5"""
        assert kernel.warp_factor(0.8) == pytest.approx(3 ** 3.5)

    def test_coherence_in_unit_interval(self):
        for gc in (0.0, 0.5, 1.0):
            for temp_k in (273.15, 310.15, 368.15):
                c = kernel.vibrational_coherence(gc, temp_k)
                assert 0.0 < c <= 1.0

    def test_combine_in_series(self):
        assert kernel.combine_in_series(2.0, 2.0) == pytest.approx(1.0)

    def test_combine_in_series_zero_rate(self):
        with pytest.raises(UnstableRegime):
            kernel.combine_in_series(0.0, 100.0)
        with pytest.raises(UnstableRegime):
            kernel.combine_in_series(100.0, 0.0)

    def test_viscosity_overflow_is_infinite(self):
        assert kernel.viscosity(20000) == math.inf
        assert kernel.diffusion_limit(310.15, 20000) == 0.0

    def test_product_affinity_floor_and_unbounded(self):
        assert kernel.product_affinity(0.01, 0.0, 1.0) == kernel.AFFINITY_FLOOR
        assert kernel.product_affinity(12.0, 0.5, 1.0) == pytest.approx(8.0)
        assert kernel.product_affinity(12.0, -1.0, 1.0) == math.inf


class TestClassification:

    def test_full_progress_wins_over_rate(self):
        assert kernel.classify_efficiency(100, 0.0) is EfficiencyLabel.QUANTUM_SYNC

    def test_extreme_before_rate_rules(self):
        assert kernel.classify_efficiency(90, 1000.0) is EfficiencyLabel.EXTREME

    def test_boundaries_are_strict(self):
        assert kernel.classify_efficiency(99, 0.0) is EfficiencyLabel.EXTREME
        assert kernel.classify_efficiency(85, 9.0) is EfficiencyLabel.HIGH
        assert kernel.classify_efficiency(0, 8.0) is EfficiencyLabel.MEDIUM
        assert kernel.classify_efficiency(0, 2.0) is EfficiencyLabel.LOW

    def test_labels_are_ordered(self):
        assert EfficiencyLabel.LOW < EfficiencyLabel.MEDIUM < EfficiencyLabel.HIGH < EfficiencyLabel.EXTREME < EfficiencyLabel.QUANTUM_SYNC

    def test_labels_support_full_ordering(self):
        assert EfficiencyLabel.LOW <= EfficiencyLabel.HIGH
        assert EfficiencyLabel.HIGH <= EfficiencyLabel.HIGH
        assert EfficiencyLabel.QUANTUM_SYNC >= EfficiencyLabel.EXTREME
        assert EfficiencyLabel.MEDIUM > EfficiencyLabel.LOW
        assert max(EfficiencyLabel) is EfficiencyLabel.QUANTUM_SYNC

    def test_hint_order(self):
        assert kernel.interpretation_hint(EfficiencyLabel.QUANTUM_SYNC, 50) == kernel.HINTS["resonance"]
        assert kernel.interpretation_hint(EfficiencyLabel.LOW, 36) == kernel.HINTS["inhibition"]
        assert kernel.interpretation_hint(EfficiencyLabel.HIGH, 35) == kernel.HINTS["stochastic"]


class TestSimulate:

    def test_deterministic(self, hammerhead):
        a = kernel.simulate(hammerhead, 10.0, 37, 25)
        b = kernel.simulate(hammerhead, 10.0, 37, 25)
        assert numeric_fields(a) == numeric_fields(b)

    def test_sequence_uppercased(self):
        assert kernel.simulate("gcau", 10.0, 37, 25).sequence == "GCAU"

    def test_empty_sequence_rejected(self):
        with pytest.raises(InvalidInput):
            kernel.simulate("", 10.0, 37, 25)

    def test_absolute_zero_rejected(self, hammerhead):
        with pytest.raises(InvalidInput):
            kernel.simulate(hammerhead, 10.0, -273.15, 25)

    def test_negative_ion_is_not_rejected(self, hammerhead):
        result = kernel.simulate(hammerhead, -5.0, 37, 25)
        assert result.audit_detail.ion_saturation == 0.0
        assert result.observed_rate == 0.0

    def test_cancelled_affinity_denominator_is_clamped(self, hammerhead):
        # ion 5 mM gives exactly half saturation, so synergy = -2 * 1 * 0.5 = -1
        result = kernel.simulate(hammerhead, 5.0, 90, -200)
        audit = result.audit_detail
        assert audit.resonance_sync == -1.0
        assert audit.product_affinity == math.inf
        assert audit.release_rate == 0.0
        assert result.observed_rate == 0.0
        assert audit.sweet_spot_progress == 0.0
        assert result.efficiency_label is EfficiencyLabel.LOW

    def test_extreme_crowding_zero_diffusion_is_clamped(self, hammerhead):
        result = kernel.simulate(hammerhead, 10.0, 37, 20000)
        audit = result.audit_detail
        assert audit.diffusion_limit == 0.0
        assert result.observed_rate == 0.0
        assert audit.sweet_spot_progress == 0.0
        assert result.efficiency_label is EfficiencyLabel.LOW
        assert math.isfinite(audit.warp_factor)

    @pytest.mark.parametrize("seq", ["GGGCGACUGAAGCGCCC", "AUAUAUAU", "GCGCGC"])
    @pytest.mark.parametrize("ion", [0.0, 5.0, 10.0, 30.0, 31.0, 50.0])
    @pytest.mark.parametrize("temp", [0.0, 37.0, 60.0, 95.0])
    @pytest.mark.parametrize("crowding", [0.0, 25.0, 100.0])
    def test_range_invariants(self, seq, ion, temp, crowding):
        result = kernel.simulate(seq, ion, temp, crowding)
        audit = result.audit_detail
        assert 0.0 <= kernel.hill_saturation(ion) < 1.0
        assert 0.0 < audit.vibrational_coherence <= 1.0
        assert audit.warp_factor >= 1.0
        assert result.observed_rate >= 0.0
        assert 0.0 <= audit.sweet_spot_progress <= 100.0
        assert all(math.isfinite(v) for v in audit.to_dict().values())

    def test_synergy_monotone_in_crowding(self, hammerhead):
        synergies = [kernel.simulate(hammerhead, 10.0, 37, c).audit_detail.resonance_sync for c in range(0, 101, 5)]
        assert all(b >= a for a, b in zip(synergies, synergies[1:]))

    def test_audit_detail_fields(self, hammerhead):
        result = kernel.simulate(hammerhead, 20.0, 60, 50)
        audit = result.audit_detail
        assert audit.active_state_pop == audit.warp_factor
        assert audit.entropy_recovery == audit.resonance_sync * 100
        assert audit.gibbs_energy == result.free_energy_estimate
        assert audit.tunneling_probability == 1e-7 * audit.vibrational_coherence * audit.warp_factor
        assert audit.ion_saturation == kernel.hill_saturation(20.0) * kernel.ion_inhibition(20.0)

    def test_to_dict_is_json_ready(self, hammerhead):
        d = kernel.simulate(hammerhead, 10.0, 37, 25).to_dict()
        assert list(d["auditDetail"].keys()) == list(AUDIT_KEYS.values())
        assert len(d["auditDetail"]) == 13
        assert json.loads(json.dumps(d))["efficiencyLabel"] == d["efficiencyLabel"]


class TestScenarios:

    def test_scenario_a_reference(self, hammerhead):
        result = kernel.simulate(hammerhead, 10.0, 37, 25)
        audit = result.audit_detail
        assert audit.stacking_stability == pytest.approx(341.3 / 17)
        assert result.free_energy_estimate == pytest.approx(-341.3 / 17 + 310.15 * 0.1)
        assert audit.warp_factor == 1.0
        assert audit.diffusion_limit == pytest.approx(8 * 0.001987 * 310.15 / (3000 * math.exp(1.125)) * 1e8)
        assert audit.sweet_spot_progress == 100.0
        assert result.efficiency_label is EfficiencyLabel.QUANTUM_SYNC
        assert result.interpretation_hint == kernel.HINTS["resonance"]

    def test_scenario_b_no_crowding_no_ion(self, hammerhead):
        result = kernel.simulate(hammerhead, 0.0, 37, 0)
        audit = result.audit_detail
        assert audit.resonance_sync == 0.0
        assert audit.warp_factor == 1.0
        assert audit.ion_saturation == 0.0
        # zero catalytic rate is clamped instead of dividing by zero
        assert result.observed_rate == 0.0
        assert audit.sweet_spot_progress == 0.0
        assert result.efficiency_label is EfficiencyLabel.LOW

    def test_scenario_c_ion_inhibition_hint(self, hammerhead):
        result = kernel.simulate(hammerhead, 40.0, 5, 100)
        assert result.efficiency_label is not EfficiencyLabel.QUANTUM_SYNC
        assert result.interpretation_hint == kernel.HINTS["inhibition"]

    def test_scenario_d_saturated(self, hammerhead):
        result = kernel.simulate(hammerhead, 50.0, 90, 100)
        assert result.audit_detail.warp_factor > 1.0
        assert result.audit_detail.sweet_spot_progress == 100.0
        assert result.efficiency_label is EfficiencyLabel.QUANTUM_SYNC
