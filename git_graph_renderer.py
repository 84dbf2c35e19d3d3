# git_graph_renderer.py

import logging

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen

from git_graph_data import CommitGraph, CommitNode, GraphEdge
from viewport import ViewportState

# --- Configuration for drawing ---
COMMIT_RADIUS = 10
BACKGROUND_COLOR = "#1a1a1a"
EDGE_COLOR = "#666666"
EDGE_THICKNESS = 2
HIGHLIGHT_COMMIT_COLOR = "#00ff00"
DEFAULT_COMMIT_COLOR = "#ffffff"

LABEL_OFFSET_X = 20
LABEL_MAX_CHARS = 30
SUMMARY_OFFSET_Y = 5
SUMMARY_COLOR = "#ffffff"
SUMMARY_FONT = ("Courier New", 12)
ID_PREFIX_LENGTH = 7
ID_OFFSET_Y = 18
ID_COLOR = "#666666"
ID_FONT = ("Courier New", 10)


class DrawingSurface:
    """Minimal 2D drawing target used by GraphRenderer."""

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str):
        raise NotImplementedError

    def stroke_line(self, start: QPointF, end: QPointF, color: str, width: float):
        raise NotImplementedError

    def fill_circle(self, center: QPointF, radius: float, color: str):
        raise NotImplementedError

    def fill_text(self, text: str, pos: QPointF, color: str, font: tuple[str, int]):
        raise NotImplementedError

    def save(self):
        raise NotImplementedError

    def restore(self):
        raise NotImplementedError

    def translate(self, dx: float, dy: float):
        raise NotImplementedError

    def scale(self, factor: float):
        raise NotImplementedError


class PainterSurface(DrawingSurface):
    """DrawingSurface backed by a QPainter."""

    def __init__(self, painter: QPainter):
        self.painter = painter
        self.painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    def fill_rect(self, x, y, width, height, color):
        self.painter.fillRect(QRectF(x, y, width, height), QColor(color))

    def stroke_line(self, start, end, color, width):
        self.painter.setPen(
            QPen(QColor(color), width, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap, Qt.PenJoinStyle.RoundJoin)
        )
        self.painter.drawLine(start, end)

    def fill_circle(self, center, radius, color):
        self.painter.setPen(Qt.PenStyle.NoPen)
        self.painter.setBrush(QBrush(QColor(color)))
        self.painter.drawEllipse(center, radius, radius)

    def fill_text(self, text, pos, color, font):
        family, size = font
        self.painter.setFont(QFont(family, size))
        self.painter.setPen(QColor(color))
        self.painter.drawText(pos, text)

    def save(self):
        self.painter.save()

    def restore(self):
        self.painter.restore()

    def translate(self, dx, dy):
        self.painter.translate(dx, dy)

    def scale(self, factor):
        self.painter.scale(factor, factor)


def truncate_label(text: str, max_chars: int = LABEL_MAX_CHARS) -> str:
    return text[:max_chars]


class GraphRenderer:
    """Draws a CommitGraph onto a DrawingSurface.

    Nothing is cached between calls, so render() can run on every paint event.
    Z-order is edges, then commit circles, then labels. Each element is drawn
    on its own so a failure on one commit does not blank the rest.
    """

    def render(self, surface: DrawingSurface, graph: CommitGraph, state: ViewportState, width: float, height: float):
        surface.fill_rect(0, 0, width, height, BACKGROUND_COLOR)

        surface.save()
        try:
            surface.translate(state.offset.x(), state.offset.y())
            surface.scale(state.scale)

            for edge in graph.edges:
                self._draw_isolated(self._draw_edge, surface, edge)
            for node in graph.nodes:
                self._draw_isolated(self._draw_node, surface, node)
            for node in graph.nodes:
                self._draw_isolated(self._draw_summary, surface, node)
                self._draw_isolated(self._draw_id, surface, node)
        finally:
            surface.restore()

    def _draw_isolated(self, draw, surface: DrawingSurface, item):
        try:
            draw(surface, item)
        except Exception as e:
            logging.warning("Failed to draw %r: %s", item, e)

    def _draw_edge(self, surface: DrawingSurface, edge: GraphEdge):
        surface.stroke_line(edge.child.position, edge.parent.position, EDGE_COLOR, EDGE_THICKNESS)

    def _draw_node(self, surface: DrawingSurface, node: CommitNode):
        color = HIGHLIGHT_COMMIT_COLOR if node.highlight else DEFAULT_COMMIT_COLOR
        surface.fill_circle(node.position, COMMIT_RADIUS, color)

    def _draw_summary(self, surface: DrawingSurface, node: CommitNode):
        surface.fill_text(
            truncate_label(node.summary),
            QPointF(node.x + LABEL_OFFSET_X, node.y + SUMMARY_OFFSET_Y),
            SUMMARY_COLOR,
            SUMMARY_FONT,
        )

    def _draw_id(self, surface: DrawingSurface, node: CommitNode):
        surface.fill_text(
            node.id[:ID_PREFIX_LENGTH],
            QPointF(node.x + LABEL_OFFSET_X, node.y + ID_OFFSET_Y),
            ID_COLOR,
            ID_FONT,
        )
