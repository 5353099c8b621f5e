# tests/conftest.py
import sys, os
# Add project root to sys.path so `os_simulator` is importable without installing
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest

import os_simulator as sim


@pytest.fixture
def collected():
    return []


@pytest.fixture
def make_kernel(collected):
    """Build a kernel whose program output lands in `collected`."""
    def _make(quantum=2, **kwargs):
        kwargs.setdefault("output", collected.append)
        return sim.Kernel(quantum, **kwargs)
    return _make

