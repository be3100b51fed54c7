"""Render hosts and the surface protocols the demo draws through."""

from .headless import FrameRecord, HeadlessContext, HeadlessTextureAllocator, RenderedItem
from .memory import AreaState, UiMemory
from .surface import AttrToggle, Context, TextureAllocator, Toggle, Ui, WindowSpec

__all__ = [
    "FrameRecord",
    "HeadlessContext",
    "HeadlessTextureAllocator",
    "RenderedItem",
    "AreaState",
    "UiMemory",
    "AttrToggle",
    "Context",
    "TextureAllocator",
    "Toggle",
    "Ui",
    "WindowSpec",
]
