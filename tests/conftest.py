"""
Test configuration and fixtures for Palette Atlas tests.
"""
import pytest
from fastapi.testclient import TestClient

# Import the main app
from main import app

from palette_atlas.services.colors.models import NamedColor, VendorInfo


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palette_atlas.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def two_cluster_catalog():
    """Five light reds followed by five dark cyans."""
    lights = [NamedColor(f"Blush {i}", hexc) for i, hexc in enumerate(
        ["#FF8080", "#FF8A8A", "#FF9090", "#FF7A7A", "#FF8585"])]
    darks = [NamedColor(f"Deep Teal {i}", hexc) for i, hexc in enumerate(
        ["#004040", "#003A3A", "#004545", "#003535", "#004242"])]
    return lights + darks


@pytest.fixture
def vendor_catalog():
    """Catalog with vendor tags and mixed hex spellings."""
    return [
        NamedColor("Tomato", "#FF6347"),
        NamedColor("Coral", "ff7f50", VendorInfo(brand="Acme", code="AC-12")),
        NamedColor("Coral", "#FF7F50", VendorInfo(brand="Acme", code="AC-03")),
        NamedColor("Navy", "#000080"),
        NamedColor("White", " #ffffff "),
    ]
