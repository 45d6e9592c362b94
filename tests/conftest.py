"""Shared pytest fixtures for the motion studio tests."""

from __future__ import annotations

import pytest

from animation import AnimationConfig, AnimationDriver, Transform
from curve_editor import CurveEditorSurface
from curve_model import CurveModel


@pytest.fixture
def model() -> CurveModel:
    """Curve model with the default control points."""
    return CurveModel()


@pytest.fixture
def surface(model: CurveModel) -> CurveEditorSurface:
    """100x100 pixel editor surface so pixels map to hundredths."""
    return CurveEditorSurface(model, 100, 100)


@pytest.fixture
def config(model: CurveModel) -> AnimationConfig:
    return AnimationConfig(model)


@pytest.fixture
def driver(config: AnimationConfig) -> AnimationDriver:
    return AnimationDriver(config)


@pytest.fixture
def transform() -> Transform:
    return Transform()
