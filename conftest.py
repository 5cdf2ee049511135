"""
Pytest configuration for the auction test suite.

Adds --stress flag for running concurrency tests with more threads and bids.
"""

import pytest


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--stress",
        action="store_true",
        default=False,
        help="Run concurrency tests with heavier thread and bid counts"
    )


def pytest_configure(config):
    """Configure pytest based on command line options"""
    config.addinivalue_line(
        "markers", "concurrency: marks tests that exercise lock contention"
    )


@pytest.fixture(scope="session")
def stress_factor(request):
    """Multiplier applied to thread and bid counts in concurrency tests"""
    return 10 if request.config.getoption("--stress") else 1
