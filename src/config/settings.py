"""Global configuration and constants for the tour engine."""

from __future__ import annotations

import os
from typing import Final

TOUR_EXTENSION: Final = ".tour"

# Reserved onboarding tour (read-only through the editor)
ONBOARDING_TOUR_ID: Final = "onboarding-assistant"
ONBOARDING_TOUR_TITLE: Final = "Onboarding Assistant"
ONBOARDING_TOUR_FILE: Final = "onboarding-assistant" + TOUR_EXTENSION

DEFAULT_TOUR_FILE_STEM: Final = "newTour"

STATE_DIR: Final = os.environ.get("CODETOUR_STATE_DIR", ".codetour")
