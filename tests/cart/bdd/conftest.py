"""Shared BDD fixtures for the cart."""

import pytest


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}
