# rna_navigator/models.py
from dataclasses import dataclass, fields
from enum import Enum
from functools import total_ordering
from typing import Optional


@total_ordering
class EfficiencyLabel(Enum):
    """Ordered efficiency categories; comparison follows declaration order."""
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    EXTREME = 3
    QUANTUM_SYNC = 4

    def __lt__(self, other):
        if not isinstance(other, EfficiencyLabel): return NotImplemented
        return self.value < other.value


# Attribute name -> exported key. Order is the export order.
AUDIT_KEYS = {
    'active_state_pop': 'activeStatePop', 'product_affinity': 'productAffinity', 'release_rate': 'releaseRate',
    'vibrational_coherence': 'vibrationalCoherence', 'resonance_sync': 'resonanceSync', 'entropy_recovery': 'entropyRecovery',
    'warp_factor': 'warpFactor', 'sweet_spot_progress': 'sweetSpotProgress', 'gibbs_energy': 'gibbsEnergy',
    'diffusion_limit': 'diffusionLimit', 'tunneling_probability': 'tunnelingProbability',
    'stacking_stability': 'stackingStability', 'ion_saturation': 'ionSaturation',
}


@dataclass(frozen=True)
class AuditDetail:
    """Intermediate quantities of one estimator run, kept verbatim for inspection.

    ``active_state_pop`` and ``warp_factor`` carry the same value under two names.
    """
    active_state_pop: float
    product_affinity: float
    release_rate: float
    vibrational_coherence: float
    resonance_sync: float
    entropy_recovery: float
    warp_factor: float
    sweet_spot_progress: float
    gibbs_energy: float
    diffusion_limit: float
    tunneling_probability: float
    stacking_stability: float
    ion_saturation: float

    def to_dict(self):
        return {AUDIT_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SimulationResult:
    sequence: str
    free_energy_estimate: float
    observed_rate: float
    efficiency_label: EfficiencyLabel
    timestamp: str
    audit_detail: AuditDetail
    interpretation_hint: Optional[str] = None

    def to_dict(self):
        """Nested plain-data form, as written to the JSON audit file."""
        return {
            'sequence': self.sequence,
            'freeEnergyEstimate': self.free_energy_estimate,
            'observedRate': self.observed_rate,
            'efficiencyLabel': self.efficiency_label.name,
            'timestamp': self.timestamp,
            'auditDetail': self.audit_detail.to_dict(),
            'interpretationHint': self.interpretation_hint,
        }

    def to_row(self):
        """Flat form with the audit keys inlined, one row of a batch or sweep table."""
        row = {k: v for k, v in self.to_dict().items() if k != 'auditDetail'}
        row.update(self.audit_detail.to_dict())
        return row
