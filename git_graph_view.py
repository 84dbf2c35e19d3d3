# git_graph_view.py

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from git_graph_renderer import GraphRenderer, PainterSurface
from git_studio import GitStudio


class GitGraphCanvas(QWidget):
    """Canvas showing the commit graph of a GitStudio session.

    Left button on a commit selects it; anywhere else it pans the view.
    The wheel zooms, Ctrl +/-/0 zoom in, out and reset.
    """

    commit_selected = pyqtSignal(object)  # CommitDetails

    def __init__(self, studio: GitStudio, parent=None):
        super().__init__(parent)
        self.studio = studio
        self.renderer = GraphRenderer()
        self.zoom_anchor_to_pointer = False

        self.setMinimumSize(200, 200)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            self.renderer.render(
                PainterSurface(painter), self.studio.graph, self.studio.viewport, self.width(), self.height()
            )
        finally:
            painter.end()

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        details = self.studio.press(event.position())
        if details is not None:
            self.commit_selected.emit(details)
        else:
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        event.accept()

    def mouseMoveEvent(self, event):
        if self.studio.controller.continue_drag(event.position()):
            self.update()

    def mouseReleaseEvent(self, event):
        self.studio.controller.end_drag()
        self.unsetCursor()
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.studio.controller.end_drag()
        self.unsetCursor()
        super().leaveEvent(event)

    def wheelEvent(self, event):
        anchor = event.position() if self.zoom_anchor_to_pointer else None
        # angleDelta is positive when scrolling up
        self.studio.controller.wheel(-event.angleDelta().y(), anchor)
        self.update()
        event.accept()

    def keyPressEvent(self, event):
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            if event.key() in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
                self.zoom_in()
                return
            if event.key() == Qt.Key.Key_Minus:
                self.zoom_out()
                return
            if event.key() == Qt.Key.Key_0:
                self.reset_view()
                return
        super().keyPressEvent(event)

    def zoom_in(self):
        self.studio.controller.zoom_in()
        self.update()

    def zoom_out(self):
        self.studio.controller.zoom_out()
        self.update()

    def reset_view(self):
        self.studio.reset_view()
        self.update()
