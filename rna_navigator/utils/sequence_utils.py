# rna_navigator/utils/sequence_utils.py
import re
from Bio.Seq import Seq
from loguru import logger
from ..exceptions import InvalidInput

RNA_PATTERN = re.compile('^[AUGC]+$', re.IGNORECASE)
PARAMETER_LABELS = {'ion_concentration': 'Mg2+ concentration (mM)', 'temperature': 'Temperature (C)', 'crowding_index': 'Crowding index (%)'}

def canonicalize_sequence(seq_str): return str(Seq(''.join(seq_str.split())).upper().transcribe()) if seq_str else ''
def is_valid_sequence(seq_str): return bool(seq_str) and RNA_PATTERN.match(seq_str) is not None

def validate_sequence(seq_str):
    """Returns the canonical RNA form of a sequence or raises InvalidInput."""
    canonical = canonicalize_sequence(seq_str)
    if not canonical: raise InvalidInput('Sequence is empty.')
    if not is_valid_sequence(canonical):
        offending = sorted(set(re.sub('[AUGC]', '', canonical)))
        raise InvalidInput(f"Sequence contains characters outside {{A,U,G,C}}: {', '.join(offending)}")
    return canonical

def check_parameter_ranges(ion_concentration, temperature, crowding_index, ranges):
    """Warns about parameters outside their typical range; returns the names that were out of range."""
    values, flagged = {'ion_concentration': ion_concentration, 'temperature': temperature, 'crowding_index': crowding_index}, []
    for name, value in values.items():
        bounds = (ranges or {}).get(name)
        if not bounds: continue
        low, high = bounds
        if not low <= value <= high:
            logger.warning(f'{PARAMETER_LABELS[name]} = {value} is outside the typical range {low}-{high}. Results are not physically meaningful.')
            flagged.append(name)
    return flagged
