"""Reserved onboarding tour.

When the onboarding assistant is switched on, a generated tour with a fixed
id, title and file handle is appended to the tours loaded from the store.
The editor treats it as read-only.
"""

from __future__ import annotations

from datetime import datetime

from config import settings
from tours.domain.models import Step, Tour

__all__ = ["is_onboarding_tour", "build_onboarding_tour"]

_WELCOME = (
    "# Welcome\n"
    "This tour walks you through the tour tool window itself.\n"
    "Use *Next Step* and *Previous Step* to move between stops."
)

_AUTHORING = (
    "# Authoring tours\n"
    "Right click the tree root to create a tour, or a tour to add a step.\n"
    "Steps can point at a file and line, or hold a description only."
)

_DISABLE = (
    "# Turning this off\n"
    "Right click this tour and choose *Disable Onboarding Assistant*."
)


def is_onboarding_tour(tour: Tour) -> bool:
    return tour.id == settings.ONBOARDING_TOUR_ID or tour.title == settings.ONBOARDING_TOUR_TITLE


def build_onboarding_tour() -> Tour:
    return Tour(
        id=settings.ONBOARDING_TOUR_ID,
        title=settings.ONBOARDING_TOUR_TITLE,
        tour_file=settings.ONBOARDING_TOUR_FILE,
        description="First-run guidance for the tours tool window",
        created_at=datetime.now(),
        steps=(
            Step(title="Welcome", description=_WELCOME, id="onboarding-welcome"),
            Step(title="Authoring tours", description=_AUTHORING, id="onboarding-authoring"),
            Step(title="Turning this off", description=_DISABLE, id="onboarding-disable"),
        ),
    )
