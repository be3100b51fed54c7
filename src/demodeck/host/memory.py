"""Host-owned layout memory (window positions, scroll offsets, collapsibles)."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["AreaState", "UiMemory"]


@dataclass(slots=True)
class AreaState:
    """Remembered placement of one window area."""

    position: tuple[float, float]
    order: int


@dataclass(slots=True)
class UiMemory:
    """Persistent interaction state the host keeps between frames.

    Visibility is not stored here; resetting or clearing the memory never
    opens or closes a window.
    """

    areas: dict[str, AreaState] = field(default_factory=dict)
    scroll_offsets: dict[str, float] = field(default_factory=dict)
    collapsing: dict[str, bool] = field(default_factory=dict)

    def area(self, title: str, *, cascade_step: float = 24.0) -> AreaState:
        """Return the area for ``title``, placing new areas in a cascade."""

        state = self.areas.get(title)
        if state is None:
            index = len(self.areas)
            offset = 32.0 + index * cascade_step
            state = AreaState(position=(offset, offset), order=index)
            self.areas[title] = state
        return state

    def bring_to_front(self, title: str) -> None:
        state = self.area(title)
        top = max((area.order for area in self.areas.values()), default=0)
        if state.order != top:
            state.order = top + 1

    def stacking(self) -> list[str]:
        """Return area titles from bottom to top."""

        return [title for title, _ in sorted(self.areas.items(), key=lambda item: item[1].order)]

    def reset_areas(self) -> None:
        """Forget window positions and stacking so windows are laid out afresh."""

        self.areas.clear()

    def is_empty(self) -> bool:
        return not (self.areas or self.scroll_offsets or self.collapsing)
