# This project was developed with assistance from AI tools.
"""Shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from homebuy.main import app


@pytest.fixture
def client():
    return TestClient(app)
