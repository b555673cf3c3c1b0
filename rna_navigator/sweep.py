# rna_navigator/sweep.py
import numpy as np
import pandas as pd
from loguru import logger
from . import kernel
from .exceptions import InvalidInput
from .models import EfficiencyLabel
from .utils import sequence_utils as su

SWEEP_PARAMETERS = ('ion_concentration', 'temperature', 'crowding_index')

def parameter_grid(start, stop, steps):
    if steps < 1: raise InvalidInput(f'Sweep needs at least one step, got {steps}.')
    return np.linspace(start, stop, num=steps)

def run_batch(sequences, ion_concentration, temperature, crowding_index):
    """Simulates every valid sequence of a {id: sequence} mapping under one set of conditions."""
    rows = []
    for seq_id, seq in sequences.items():
        try: canonical = su.validate_sequence(seq)
        except InvalidInput as e: logger.warning(f'Skipping \'{seq_id}\': {e}'); continue
        result = kernel.simulate(canonical, ion_concentration, temperature, crowding_index)
        rows.append({'sequence_id': seq_id, **result.to_row()})
    logger.info(f'Batch simulated {len(rows)} of {len(sequences)} sequence(s).')
    return pd.DataFrame(rows)

def run_sweep(sequence, parameter, values, base):
    """Simulates one sequence while varying a single parameter over the given values.

    ``base`` holds the fixed values of the other parameters, keyed by parameter name.
    """
    if parameter not in SWEEP_PARAMETERS: raise InvalidInput(f'Unknown sweep parameter \'{parameter}\'. Choose from: {", ".join(SWEEP_PARAMETERS)}')
    canonical = su.validate_sequence(sequence)
    rows = []
    for value in values:
        conditions = {**base, parameter: float(value)}
        result = kernel.simulate(canonical, conditions['ion_concentration'], conditions['temperature'], conditions['crowding_index'])
        rows.append({parameter: float(value), **result.to_row()})
    logger.info(f'Swept {parameter} over {len(rows)} point(s) for {len(canonical)} nt sequence.')
    return pd.DataFrame(rows)

def summarize_labels(df):
    """Counts of each efficiency label in label order, zeros included."""
    counts = df['efficiencyLabel'].value_counts() if not df.empty else pd.Series(dtype=int)
    return {label.name: int(counts.get(label.name, 0)) for label in EfficiencyLabel}
