# rna_navigator/exceptions.py
class InvalidInput(ValueError):
    """Raised when a sequence or parameter cannot be fed to the estimator."""

class UnstableRegime(ArithmeticError):
    """Raised when a rate combination would divide by a zero rate."""
