"""Deep links into the demo app and the edge-triggered dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import assert_never

from .windows import OpenWindows, WindowKind

__all__ = ["DemoLink", "DemoEnvironment", "LinkDispatcher", "link_target"]

LOGGER = logging.getLogger(__name__)


class DemoLink(str, Enum):
    """Link to show a specific part of the demo app."""

    CLOCK = "clock"


@dataclass(slots=True)
class DemoEnvironment:
    """Per-frame input supplied by the host.

    Attributes:
        seconds_since_midnight: Local time, used by the menu bar clock and the
            fractal clock. ``None`` hides the clock button.
        link: Set to open a specific part of the demo app.
    """

    seconds_since_midnight: float | None = None
    link: DemoLink | None = None

    @classmethod
    def now(cls, link: DemoLink | None = None, *, clock: datetime | None = None) -> DemoEnvironment:
        """Build an environment from the local wall clock."""

        moment = clock or datetime.now()
        midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
        return cls(seconds_since_midnight=(moment - midnight).total_seconds(), link=link)


def link_target(link: DemoLink) -> WindowKind:
    """Return the window a link forces open."""

    match link:
        case DemoLink.CLOCK:
            return WindowKind.FRACTAL_CLOCK
        case _:
            assert_never(link)


class LinkDispatcher:
    """Opens the linked window whenever the requested link changes.

    A link held across frames only reconciles once, so the user can still
    close the window it opened.
    """

    __slots__ = ("previous",)

    def __init__(self, previous: DemoLink | None = None) -> None:
        self.previous = previous

    def changed(self, link: DemoLink | None) -> bool:
        return link != self.previous

    def dispatch(self, link: DemoLink | None, windows: OpenWindows) -> OpenWindows:
        """Return the visibility set to use this frame and remember ``link``."""

        result = windows
        if self.changed(link) and link is not None:
            target = link_target(link)
            LOGGER.info("Link %s activated; isolating %s window", link.value, target.value)
            result = OpenWindows.isolated(target)
        self.previous = link
        return result
