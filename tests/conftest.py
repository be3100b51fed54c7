"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from demodeck.demo import DemoEnvironment, DemoWindows
from demodeck.host.headless import FrameRecord, HeadlessContext, HeadlessTextureAllocator

Render = Callable[..., FrameRecord]


@pytest.fixture
def ctx() -> HeadlessContext:
    return HeadlessContext()


@pytest.fixture
def demo_app() -> DemoWindows:
    return DemoWindows()


@pytest.fixture
def render(ctx: HeadlessContext, demo_app: DemoWindows) -> Render:
    """Run one frame of ``demo_app`` on the headless context."""

    def _render(
        env: DemoEnvironment | None = None,
        textures: HeadlessTextureAllocator | None = None,
    ) -> FrameRecord:
        environment = env or DemoEnvironment()
        return ctx.run_frame(lambda ui: demo_app.ui(ui, environment, textures))

    return _render
