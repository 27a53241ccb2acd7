"""Pytest configuration for prism tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti

from prism.scene.world import World


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Only the export kernel needs Taichi, but initializing it once up front
    avoids repeated ti.init() calls from individual tests.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def default_world() -> World:
    """A fresh two-sphere reference world for each test."""
    return World.default()
