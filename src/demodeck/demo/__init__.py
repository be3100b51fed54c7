"""Demo app core: visibility set, link dispatch, menu bar and orchestration."""

from .demo_windows import DemoWindows
from .links import DemoEnvironment, DemoLink, LinkDispatcher, link_target
from .menu_bar import format_clock, show_menu_bar
from .windows import OpenWindows, WindowFlag, WindowKind

__all__ = [
    "DemoWindows",
    "DemoEnvironment",
    "DemoLink",
    "LinkDispatcher",
    "link_target",
    "format_clock",
    "show_menu_bar",
    "OpenWindows",
    "WindowFlag",
    "WindowKind",
]
