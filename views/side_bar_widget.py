from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QButtonGroup, QSizePolicy, QToolButton, QVBoxLayout, QWidget

from git_studio import ToolView

TOOL_LABELS = {
    ToolView.GRAPH: "Graph",
    ToolView.BRANCHES: "Branches",
    ToolView.FILES: "Files",
    ToolView.STATS: "Stats",
    ToolView.HISTORY: "History",
}

TOOL_BUTTON_STYLE = """
    QToolButton {
        border: none;
        background-color: transparent;
        padding: 6px;
        text-align: left;
    }
    QToolButton:hover {
        background-color: #e0e0e0;
    }
    QToolButton:checked {
        background-color: #2196F3;
        color: white;
    }
    QToolButton:checked:!active {
        background-color: #cccccc;
    }
"""


class SideBarWidget(QWidget):
    tool_selected = pyqtSignal(object)  # ToolView

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedWidth(110)
        self.setStyleSheet("background-color: #f0f0f0;")

        layout = QVBoxLayout()
        layout.setContentsMargins(5, 10, 5, 10)
        layout.setSpacing(6)
        self.setLayout(layout)

        self.button_group = QButtonGroup(self)
        self.button_group.setExclusive(True)
        self.buttons: dict[ToolView, QToolButton] = {}

        for view, label in TOOL_LABELS.items():
            button = QToolButton()
            button.setText(self.tr(label))
            button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
            button.setCheckable(True)
            button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
            button.setStyleSheet(TOOL_BUTTON_STYLE)
            button.clicked.connect(lambda _checked, v=view: self.tool_selected.emit(v))
            self.button_group.addButton(button)
            self.buttons[view] = button
            layout.addWidget(button)

        layout.addStretch()
        self.set_active(ToolView.GRAPH)

    def set_active(self, view: ToolView):
        """只更新按钮状态，不发出信号"""
        self.buttons[view].setChecked(True)
