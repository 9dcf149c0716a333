"""Code tour state engine.

Public surface for hosts embedding the tours tool window: the per-session
``TourStateEngine`` façade, the ``Step``/``Tour`` records, the error kinds and
the collaborator protocols.
"""

from __future__ import annotations

from .domain.models import Direction, Step, Tour  # noqa: F401
from .errors import ErrorKind, TourError  # noqa: F401
from .protocols import DocRenderer, Location, Navigator, StepPosition, TourStore  # noqa: F401
from .engine import TourStateEngine  # noqa: F401

__all__ = [
    "TourStateEngine",
    "Direction",
    "Step",
    "Tour",
    "ErrorKind",
    "TourError",
    "DocRenderer",
    "Location",
    "Navigator",
    "StepPosition",
    "TourStore",
]
