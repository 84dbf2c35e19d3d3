from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QMenu, QPushButton, QToolButton, QWidget

from git_studio import StatusKind

STATUS_COLORS = {
    StatusKind.INFO: "#2196F3",
    StatusKind.SUCCESS: "#2e7d32",
    StatusKind.ERROR: "#ff0000",
}


class TopBarWidget(QWidget):
    open_folder_requested = pyqtSignal()
    recent_folder_selected = pyqtSignal(str)
    clear_recent_folders_requested = pyqtSignal()
    zoom_in_requested = pyqtSignal()
    zoom_out_requested = pyqtSignal()
    reset_view_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedHeight(50)

        self._layout = QHBoxLayout()
        self._layout.setContentsMargins(10, 5, 10, 5)
        self._layout.setSpacing(10)
        self.setLayout(self._layout)

        # --- Open Folder Button ---
        self.open_button = QPushButton("📁 Open Repository")
        self.open_button.clicked.connect(self.open_folder_requested.emit)
        self._layout.addWidget(self.open_button)

        # --- Recent Folders Button and Menu ---
        self.recent_button = QPushButton("Recent")
        self.recent_menu = QMenu(self)
        self.recent_button.setMenu(self.recent_menu)
        self._layout.addWidget(self.recent_button)

        # --- Tool Title ---
        self.title_label = QLabel("GRAPH")
        self.title_label.setStyleSheet("font-weight: bold;")
        self._layout.addWidget(self.title_label)

        self._layout.addStretch(1)

        # --- Status ---
        self.status_label = QLabel("")
        self._layout.addWidget(self.status_label)

        separator = QFrame()
        separator.setFrameShape(QFrame.Shape.VLine)
        separator.setFrameShadow(QFrame.Shadow.Sunken)
        self._layout.addWidget(separator)

        # --- Zoom Buttons ---
        self.zoom_out_button = QToolButton()
        self.zoom_out_button.setText("−")
        self.zoom_out_button.setToolTip("Zoom out (Ctrl -)")
        self.zoom_out_button.clicked.connect(self.zoom_out_requested.emit)
        self._layout.addWidget(self.zoom_out_button)

        self.zoom_in_button = QToolButton()
        self.zoom_in_button.setText("+")
        self.zoom_in_button.setToolTip("Zoom in (Ctrl +)")
        self.zoom_in_button.clicked.connect(self.zoom_in_requested.emit)
        self._layout.addWidget(self.zoom_in_button)

        self.reset_button = QToolButton()
        self.reset_button.setText("Reset")
        self.reset_button.setToolTip("Reset view (Ctrl 0)")
        self.reset_button.clicked.connect(self.reset_view_requested.emit)
        self._layout.addWidget(self.reset_button)

    def update_recent_menu(self, recent_folders):
        self.recent_menu.clear()
        for folder in recent_folders:
            action = QAction(folder, self)
            action.triggered.connect(lambda checked=False, f=folder: self.recent_folder_selected.emit(f))
            self.recent_menu.addAction(action)
        if recent_folders:
            self.recent_menu.addSeparator()
        self.clear_recent_action = QAction("Clear Recent", self)
        self.clear_recent_action.setEnabled(bool(recent_folders))
        self.clear_recent_action.triggered.connect(self.clear_recent_folders_requested.emit)
        self.recent_menu.addAction(self.clear_recent_action)

    def set_title(self, title: str):
        self.title_label.setText(title)

    def set_status(self, message: str, kind: StatusKind):
        self.status_label.setText(message)
        self.status_label.setStyleSheet(f"color: {STATUS_COLORS[kind]};")
