"""Errors raised by the simulation core.

The tick loop itself never raises: dead ends, degenerate distributions
and over-long paths are all handled by resetting the affected ant.  The
only failure mode is a bad parameter bundle, which is caught when the
configuration is built.
"""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """A parameter bundle violates a documented range."""
