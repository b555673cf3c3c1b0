"""
Pytest fixtures for the RNA-Navigator test suite.
"""

import pytest

HAMMERHEAD = "GGGCGACUGAAGCGCCC"


@pytest.fixture
def hammerhead():
    """Default hammerhead-like sequence (13 of 17 bases G/C)."""
    return HAMMERHEAD


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory so no local rna-navigator.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
