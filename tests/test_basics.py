# tests/test_basics.py

import land4health
from land4health import extract, representativity, region, indicators, catalog

def test_imports():
    """Simple smoke test to ensure modules import correctly."""
    assert extract is not None
    assert representativity is not None
    assert region is not None
    assert indicators is not None
    assert catalog is not None

def test_public_api():
    for name in land4health.__all__:
        assert hasattr(land4health, name), name

def test_version():
    assert land4health.__version__.count(".") == 2
