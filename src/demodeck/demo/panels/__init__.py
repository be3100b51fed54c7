"""Bodies of the individual demo windows."""

from .color_test import ColorTest
from .demo_panel import DemoPanel
from .fractal_clock import FractalClock
from .lorem import LOREM_IPSUM, LOREM_IPSUM_LONG

__all__ = ["ColorTest", "DemoPanel", "FractalClock", "LOREM_IPSUM", "LOREM_IPSUM_LONG"]
