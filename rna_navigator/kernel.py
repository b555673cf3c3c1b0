# rna_navigator/kernel.py
"""Closed-form estimator of the catalytic/thermodynamic profile of an RNA sequence.

The model chains empirical formulas: base stacking and crowding-dependent viscosity
give the free energy and the diffusion limit, a Hill curve gives Mg2+ saturation,
and the kinetic and diffusion rates are combined into an observed cleavage rate
that is classified into an efficiency label. All constants are calibration values
of the model and are reproduced exactly.
"""
import math
from datetime import datetime
from loguru import logger
from .exceptions import InvalidInput, UnstableRegime
from .models import AuditDetail, EfficiencyLabel, SimulationResult
from .utils import thermo_utils as tu

PLANCK_H = 6.626e-34
K_HALF_MG, N_HILL = 5.0, 2.4
INHIBITION_ONSET_MM, INHIBITION_SLOPE = 30.0, 0.05
SYNC_THRESHOLD, WARP_SCALE, WARP_EXPONENT = 0.7, 20.0, 3.5
AFFINITY_FLOOR = 0.05
RELEASE_UNIT_FIX, RELEASE_SYNERGY_GAIN = 1e-13, 15.0
COHERENCE_REF_K = 325.0
KCAT_MAX = 15000.0
RATE_EPSILON = 1e-10
SWEET_SPOT_FRACTION = 0.0008
HINT_ION_THRESHOLD_MM = 35.0

HINTS = {
    'resonance': 'Coherence achieved via stacking resonance. Theoretical tunneling detected.',
    'inhibition': 'Inhibition observed. High ion concentration likely reduces flexibility.',
    'stochastic': 'Stochastic limit. Activation barrier remains primary kinetic bottleneck.',
}


def stacking_stability(gc): return abs(gc * 22.5 + (1 - gc) * 12.2)
def viscosity(crowding_index):
    try: return math.exp(crowding_index * 0.045)
    except OverflowError: return math.inf  # diffusion limit becomes 0

def product_affinity(gibbs, synergy, warp):
    """Floored product affinity; unbounded when the synergy term cancels the denominator."""
    denominator = 1 + synergy * warp
    if denominator == 0: return math.inf
    return max(AFFINITY_FLOOR, abs(gibbs) / denominator)
def diffusion_limit(temp_k, crowding_index): return (8 * tu.R_GAS * temp_k) / (3000 * viscosity(crowding_index)) * 1e8
def hill_saturation(ion_concentration): return tu.hill_saturation(ion_concentration, K_HALF_MG, N_HILL)

def ion_inhibition(ion_concentration):
    if ion_concentration <= INHIBITION_ONSET_MM: return 1.0
    return 1 / (1 + (ion_concentration - INHIBITION_ONSET_MM) * INHIBITION_SLOPE)

def resonance_synergy(crowding_index, temperature, ion_effect): return (crowding_index / 100) * (temperature / 90) * ion_effect

def warp_factor(synergy):
    """Resonance amplification; exactly 1.0 up to and including the sync threshold."""
    if synergy > SYNC_THRESHOLD: return ((synergy - SYNC_THRESHOLD) * WARP_SCALE + 1) ** WARP_EXPONENT
    return 1.0

def vibrational_coherence(gc, temp_k): return math.exp(-(gc * 3.0)) / (1 + (temp_k / COHERENCE_REF_K) ** 20 * 0.02)

def combine_in_series(internal_rate, diffusion_rate):
    """Resistances-in-series combination of the kinetic and diffusion-limited rates."""
    if internal_rate == 0 or diffusion_rate == 0:
        raise UnstableRegime(f'Cannot combine rates in series: internal={internal_rate}, diffusion={diffusion_rate}')
    resistance = 1 / internal_rate + 1 / diffusion_rate
    if resistance == 0: raise UnstableRegime('Rate resistances cancel out.')
    return 1 / resistance

def classify_efficiency(progress, observed_rate):
    """First matching rule wins; progress thresholds take priority over raw rates."""
    if progress > 99: return EfficiencyLabel.QUANTUM_SYNC
    if progress > 85: return EfficiencyLabel.EXTREME
    if observed_rate > 8.0: return EfficiencyLabel.HIGH
    if observed_rate > 2.0: return EfficiencyLabel.MEDIUM
    return EfficiencyLabel.LOW

def interpretation_hint(label, ion_concentration):
    if label is EfficiencyLabel.QUANTUM_SYNC: return HINTS['resonance']
    if ion_concentration > HINT_ION_THRESHOLD_MM: return HINTS['inhibition']
    return HINTS['stochastic']


def simulate(sequence, ion_concentration, temperature, crowding_index):
    """Runs the estimator on an already validated sequence and returns a fresh SimulationResult.

    Raises InvalidInput for an empty sequence or a temperature at or below absolute zero.
    """
    seq = sequence.upper()
    if not seq: raise InvalidInput('Cannot simulate an empty sequence.')
    temp_k = tu.to_kelvin(temperature)
    if temp_k <= 0: raise InvalidInput(f'Temperature {temperature} C is at or below absolute zero.')
    if ion_concentration < 0: logger.warning(f'Negative ion concentration ({ion_concentration} mM); Mg2+ saturation taken as 0.')
    logger.debug(f'Simulating {len(seq)} nt at Mg2+={ion_concentration} mM, T={temperature} C, crowding={crowding_index}%')
    gc = tu.calculate_gc_fraction(seq)
    rt = tu.R_GAS * temp_k

    stacking = stacking_stability(gc)
    k_diffusion = diffusion_limit(temp_k, crowding_index)

    ion_effect = hill_saturation(ion_concentration)
    inhibition = ion_inhibition(ion_concentration)

    delta_h = -stacking
    delta_s = -(0.055 + (crowding_index / 100) * 0.18)
    gibbs = delta_h - temp_k * delta_s
    synergy = resonance_synergy(crowding_index, temperature, ion_effect)
    warp = warp_factor(synergy)

    affinity = product_affinity(gibbs, synergy, warp)
    k_off = (tu.R_GAS * temp_k / PLANCK_H) * math.exp(-affinity / rt) * RELEASE_UNIT_FIX * (1 + synergy * RELEASE_SYNERGY_GAIN)
    coherence = vibrational_coherence(gc, temp_k)
    k_cat_raw = KCAT_MAX * coherence * ion_effect * inhibition * warp
    k_internal = (k_cat_raw * k_off) / (k_cat_raw + k_off + RATE_EPSILON)
    try:
        k_obs = combine_in_series(k_internal, k_diffusion)
        progress = min(100.0, (k_obs / (k_diffusion * SWEET_SPOT_FRACTION)) * 100)
    except UnstableRegime as e:
        logger.warning(f'Unstable regime, observed rate clamped to 0. {e}')
        k_obs, progress = 0.0, 0.0

    label = classify_efficiency(progress, k_obs)
    audit = AuditDetail(
        active_state_pop=warp, product_affinity=affinity, release_rate=k_off,
        vibrational_coherence=coherence, resonance_sync=synergy, entropy_recovery=synergy * 100,
        warp_factor=warp, sweet_spot_progress=progress, gibbs_energy=gibbs, diffusion_limit=k_diffusion,
        tunneling_probability=1e-7 * coherence * warp, stacking_stability=stacking,
        ion_saturation=ion_effect * inhibition,
    )
    logger.debug(f'dG={gibbs:.3f} kcal/mol, k_obs={k_obs:.4g} min^-1, progress={progress:.1f}% -> {label.name}')
    return SimulationResult(
        sequence=seq, free_energy_estimate=gibbs, observed_rate=k_obs, efficiency_label=label,
        timestamp=datetime.now().isoformat(timespec='seconds'), audit_detail=audit,
        interpretation_hint=interpretation_hint(label, ion_concentration),
    )
