"""Integration test fixtures and configuration."""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (spawns real processes)",
    )
