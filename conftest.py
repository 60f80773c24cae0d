"""Configures pytest further: opt out of slow key sizes, opt in to extreme ones."""
import random

import pytest


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower key generation tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run very large key generation tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def seeded_rng(request) -> random.Random:
    """A random source seeded from the test name, so every test draws the same keys on every run."""
    return random.Random(request.node.name)
