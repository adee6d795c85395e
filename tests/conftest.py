"""Pytest configuration for spatial kernel tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. fast_math stays off
    so the empty-box infinities and the slab test's NaN guards behave.
    """
    from src.spatial.core.runtime import RuntimeConfig, init_runtime

    init_runtime(RuntimeConfig(arch="cpu", random_seed=42))
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after
