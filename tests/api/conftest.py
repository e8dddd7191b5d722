"""
Shared fixtures for router tests.

Dependencies: pytest, fastapi
System role: HTTP layer test setup
"""

import pytest
from fastapi.testclient import TestClient

from spacecat_api.api.main import create_app


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()
