"""
Pytest configuration and fixtures
"""
import pytest
import sys
import os

# Add the project root to the path so the flat modules import without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app as flask_app


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture
def client(app):
    """Flask test client for the form page and the JSON endpoint"""
    return app.test_client()
