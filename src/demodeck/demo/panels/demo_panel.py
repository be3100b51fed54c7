"""Contents of the main "Demo" window."""

from __future__ import annotations

from dataclasses import dataclass

from ...host.surface import AttrToggle, Ui
from .lorem import LOREM_IPSUM


@dataclass(slots=True)
class DemoPanel:
    """A handful of widgets whose state survives restarts."""

    counter: int = 0
    show_lorem: bool = True
    greeting: str = "Hello"

    def ui(self, ui: Ui) -> None:
        ui.heading("Widgets")
        ui.label(f"{self.greeting}! The counter is at {self.counter}.")
        if ui.button("Increment"):
            self.counter += 1
        if ui.button("Reset", hover_text="Set the counter back to zero"):
            self.counter = 0
        ui.separator()
        ui.checkbox(AttrToggle(self, "show_lorem"), "Show lorem ipsum")
        if self.show_lorem:
            ui.label(LOREM_IPSUM)
