"""Tests for the host-owned UI memory."""

from __future__ import annotations

from demodeck.host.memory import UiMemory


def test_new_areas_cascade_and_stack_in_creation_order() -> None:
    memory = UiMemory()

    first = memory.area("Demo")
    second = memory.area("Settings")

    assert first.position != second.position
    assert memory.stacking() == ["Demo", "Settings"]
    assert memory.area("Demo") is first


def test_bring_to_front_reorders_stacking() -> None:
    memory = UiMemory()
    memory.area("Demo")
    memory.area("Settings")

    memory.bring_to_front("Demo")

    assert memory.stacking() == ["Settings", "Demo"]


def test_reset_areas_keeps_scroll_and_collapsing_state() -> None:
    memory = UiMemory()
    memory.area("Demo")
    memory.scroll_offsets["Demo"] = 40.0
    memory.collapsing["Demo/more"] = True

    memory.reset_areas()

    assert memory.areas == {}
    assert memory.scroll_offsets == {"Demo": 40.0}
    assert memory.collapsing == {"Demo/more": True}
    assert not memory.is_empty()


def test_fresh_memory_is_empty() -> None:
    assert UiMemory().is_empty()
