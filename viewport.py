# viewport.py

import math
from typing import Iterable, Optional

from PyQt6.QtCore import QPointF

from git_graph_data import CommitNode

MIN_SCALE = 0.1
MAX_SCALE = 10.0
ZOOM_STEP = 1.1
WHEEL_ZOOM_IN = 1.1
WHEEL_ZOOM_OUT = 0.9
PICK_RADIUS = 15


class ViewportState:
    def __init__(self):
        self.scale: float = 1.0
        self.offset: QPointF = QPointF(0.0, 0.0)
        self.drag_origin: Optional[QPointF] = None

    @property
    def is_dragging(self) -> bool:
        return self.drag_origin is not None

    def __repr__(self) -> str:
        return (
            f"ViewportState(scale={self.scale:.3f}, "
            f"offset=({self.offset.x():.1f}, {self.offset.y():.1f}), "
            f"dragging={self.is_dragging})"
        )


class ViewportController:
    """Pan, zoom and picking on top of a ViewportState.

    Screen points map to world points through ``screen = world * scale + offset``.
    Zooming is relative to the viewport origin unless an anchor is given, in
    which case the world point under the anchor stays put.
    """

    def __init__(self, state: ViewportState):
        self.state = state

    def world_to_screen(self, point: QPointF) -> QPointF:
        return point * self.state.scale + self.state.offset

    def screen_to_world(self, point: QPointF) -> QPointF:
        return (point - self.state.offset) * (1.0 / self.state.scale)

    # --- drag ---

    def begin_drag(self, point: QPointF):
        self.state.drag_origin = point - self.state.offset

    def continue_drag(self, point: QPointF) -> bool:
        """Move the offset if a drag is active. Returns whether anything changed."""
        if self.state.drag_origin is None:
            return False
        self.state.offset = point - self.state.drag_origin
        return True

    def end_drag(self):
        self.state.drag_origin = None

    def pointer_down(self, point: QPointF, nodes: Iterable[CommitNode]) -> Optional[CommitNode]:
        """Select the node under the pointer, or start panning when nothing is hit."""
        node = self.hit_test(point, nodes)
        if node is None:
            self.begin_drag(point)
        return node

    # --- zoom ---

    def zoom(self, factor: float, anchor: Optional[QPointF] = None):
        if factor <= 0:
            raise ValueError(f"zoom factor must be positive, got {factor}")

        world_anchor = self.screen_to_world(anchor) if anchor is not None else None
        self.state.scale = min(MAX_SCALE, max(MIN_SCALE, self.state.scale * factor))
        if world_anchor is not None:
            self.state.offset = anchor - world_anchor * self.state.scale

    def zoom_in(self, anchor: Optional[QPointF] = None):
        self.zoom(ZOOM_STEP, anchor)

    def zoom_out(self, anchor: Optional[QPointF] = None):
        self.zoom(1.0 / ZOOM_STEP, anchor)

    def wheel(self, delta_y: float, anchor: Optional[QPointF] = None):
        # positive delta means scrolling down, which zooms out
        if delta_y == 0:
            return
        self.zoom(WHEEL_ZOOM_OUT if delta_y > 0 else WHEEL_ZOOM_IN, anchor)

    def reset(self):
        self.state.scale = 1.0
        self.state.offset = QPointF(0.0, 0.0)
        self.state.drag_origin = None

    # --- picking ---

    def hit_test(self, point: QPointF, nodes: Iterable[CommitNode]) -> Optional[CommitNode]:
        world = self.screen_to_world(point)
        best: Optional[CommitNode] = None
        best_distance = PICK_RADIUS
        for node in nodes:
            distance = math.hypot(world.x() - node.x, world.y() - node.y)
            # strict comparison keeps the earliest node on ties
            if distance < best_distance:
                best = node
                best_distance = distance
        return best
