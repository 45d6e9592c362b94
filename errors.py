"""Exceptions shared by the curve model, editor and animation driver."""
from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised for a bad control point index or a non-finite value.

    The offending call is rejected before any state is touched.
    """


class DegenerateConfiguration(ValueError):
    """Raised when an animation setting cannot be used, e.g. a zero loop."""


class NumericNonconvergence(ArithmeticError):
    """Newton iteration gave up; only used inside :mod:`easing`."""
