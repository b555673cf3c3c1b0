# rna_navigator/utils/thermo_utils.py
R_GAS = 0.001987  # kcal/(mol*K)
KELVIN_OFFSET = 273.15
def calculate_gc_fraction(s): return (s.upper().count('G') + s.upper().count('C')) / len(s)
def to_kelvin(temp_c): return temp_c + KELVIN_OFFSET
def hill_saturation(conc, k_half, n_hill):
    """Hill binding fraction c^n / (K^n + c^n); zero for non-positive concentrations."""
    if conc <= 0: return 0.0
    return conc ** n_hill / (k_half ** n_hill + conc ** n_hill)
