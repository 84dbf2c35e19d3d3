import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QGridLayout,
    QLabel,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from git_studio import GitStudio


class BranchesView(QTreeWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setHeaderLabels(["Branch", ""])
        self.setRootIsDecorated(False)

    def refresh(self, studio: GitStudio):
        self.clear()
        for branch, is_current in studio.branch_rows():
            item = QTreeWidgetItem([branch, "(HEAD)" if is_current else ""])
            if is_current:
                font = item.font(0)
                font.setBold(True)
                item.setFont(0, font)
            self.addTopLevelItem(item)
        self.resizeColumnToContents(0)


class FilesView(QTreeWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setHeaderLabels(["Path", "Object"])
        self.setRootIsDecorated(False)

    def refresh(self, studio: GitStudio):
        self.clear()
        try:
            entries = studio.list_files()
        except Exception as e:
            logging.warning("Error reading tree: %s", e)
            self.addTopLevelItem(QTreeWidgetItem(["Error reading tree.", ""]))
            return

        for entry in entries:
            marker = "📁" if entry.is_dir else "📄"
            self.addTopLevelItem(QTreeWidgetItem([f"{marker} {entry.path}", entry.short_id]))
        self.resizeColumnToContents(0)


class StatsView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QGridLayout()
        self.setLayout(layout)

        value_font = QFont()
        value_font.setPointSize(24)
        value_font.setBold(True)

        self.value_labels: dict[str, QLabel] = {}
        for column, name in enumerate(["Commits", "Branches", "Contributors"]):
            value_label = QLabel("0")
            value_label.setFont(value_font)
            value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            caption = QLabel(name)
            caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
            layout.addWidget(value_label, 0, column)
            layout.addWidget(caption, 1, column)
            self.value_labels[name] = value_label
        layout.setRowStretch(2, 1)

    def refresh(self, studio: GitStudio):
        stats = studio.stats()
        self.value_labels["Commits"].setText(str(stats.commits))
        self.value_labels["Branches"].setText(str(stats.branches))
        self.value_labels["Contributors"].setText(str(stats.contributors))


class HistoryView(QWidget):
    commit_clicked = pyqtSignal(str)  # commit id

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        self.history_list = QTreeWidget(self)
        self.history_list.setHeaderLabels(["提交信息", "日期"])
        self.history_list.setRootIsDecorated(False)
        self.history_list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self.history_list)

    def refresh(self, studio: GitStudio):
        self.history_list.clear()
        for node, date in studio.history_rows():
            item = QTreeWidgetItem([node.summary, date])
            item.setData(0, Qt.ItemDataRole.UserRole, node.id)
            item.setToolTip(0, node.id)
            self.history_list.addTopLevelItem(item)
        self.history_list.resizeColumnToContents(0)

    def _on_item_clicked(self, item, column):
        commit_id = item.data(0, Qt.ItemDataRole.UserRole)
        if commit_id:
            self.commit_clicked.emit(commit_id)
