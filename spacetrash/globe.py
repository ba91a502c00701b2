"""
Globe Collaborator Interface

The narrow slice of a virtual-globe rendering engine that the tracker
talks to: geographic positions, labelled point renderables, renderable
layers and a window that invokes redraw callbacks once per drawn frame.

The classes here are headless. They keep the same state a real engine
would (positions, layer contents, pending redraws) without drawing
anything, so the tracker can be driven from scripts and tests. A real
engine binding only needs to offer the same attributes and methods.
"""

import logging
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Redraw stages passed to redraw callbacks
BEFORE_REDRAW = "before_redraw"
AFTER_REDRAW = "after_redraw"

RedrawCallback = Callable[["WorldWindow", str], None]


class Position(BaseModel):
    """Geographic position: degrees, degrees, meters above the ellipsoid."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    altitude: float


class GeographicText:
    """A text label drawn at a geographic position."""

    def __init__(self, position: Position, text: str):
        self.position = position
        self.text = text
        self.enabled = True

    def __repr__(self):
        return f"GeographicText({self.text!r}, {self.position!r})"


class RenderableLayer:
    """An ordered collection of renderables drawn together."""

    def __init__(self, display_name: str):
        self.display_name = display_name
        self.enabled = True
        self.renderables: List[Any] = []

    def add_renderable(self, renderable: Any) -> None:
        self.renderables.append(renderable)

    def remove_renderable(self, renderable: Any) -> None:
        self.renderables.remove(renderable)

    def remove_all_renderables(self) -> None:
        self.renderables.clear()


class WorldWindow:
    """
    Headless window holding layers and redraw callbacks.

    redraw() only requests a frame; draw_frame() draws one, invoking every
    registered callback with BEFORE_REDRAW and then AFTER_REDRAW. Callbacks
    may request another redraw from inside a frame, which is how animations
    keep themselves going.
    """

    def __init__(self, name: str = "canvas"):
        self.name = name
        self.layers: List[RenderableLayer] = []
        self.redraw_callbacks: List[RedrawCallback] = []
        self.redraw_requested = False
        self.frame_count = 0

    def add_layer(self, layer: RenderableLayer) -> None:
        self.layers.append(layer)

    def remove_layer(self, layer: RenderableLayer) -> None:
        self.layers.remove(layer)

    def redraw(self) -> None:
        self.redraw_requested = True

    def draw_frame(self) -> None:
        """Draw a single frame."""
        self.redraw_requested = False
        for callback in list(self.redraw_callbacks):
            callback(self, BEFORE_REDRAW)
        self.frame_count += 1
        for callback in list(self.redraw_callbacks):
            callback(self, AFTER_REDRAW)

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Draw frames while redraws are requested.

        Args:
            max_frames: Stop after this many frames (None for no limit)

        Returns:
            Number of frames drawn
        """
        drawn = 0
        while self.redraw_requested:
            if max_frames is not None and drawn >= max_frames:
                break
            self.draw_frame()
            drawn += 1
        logger.debug(f"Drew {drawn} frame(s) on {self.name}")
        return drawn
