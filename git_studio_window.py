import logging
import os

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QFileDialog, QHBoxLayout, QMainWindow, QSplitter, QStackedWidget, QVBoxLayout, QWidget

from git_graph_view import GitGraphCanvas
from git_studio import GitStudio, ToolView
from repository_loader import RepositoryLoader
from settings import settings
from threads import RepositoryLoadThread
from views.info_panel import InfoPanel
from views.side_bar_widget import SideBarWidget
from views.tool_views import BranchesView, FilesView, HistoryView, StatsView
from views.top_bar_widget import TopBarWidget


class GitStudioWindow(QMainWindow):
    def __init__(self, studio: GitStudio = None):
        super().__init__()
        self.setWindowTitle(self.tr("Git Studio"))
        self.resize(*settings.get_window_size())
        self.setAcceptDrops(True)

        self.settings = settings
        self.studio = studio or GitStudio()
        self._load_threads: list[RepositoryLoadThread] = []

        # 创建主窗口部件
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_widget.setLayout(main_layout)

        self.top_bar = TopBarWidget(self)
        main_layout.addWidget(self.top_bar)

        body_layout = QHBoxLayout()
        body_layout.setContentsMargins(0, 0, 0, 0)
        body_layout.setSpacing(0)
        main_layout.addLayout(body_layout)

        # 左侧工具栏
        self.side_bar = SideBarWidget()
        body_layout.addWidget(self.side_bar)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.setChildrenCollapsible(False)
        splitter.setHandleWidth(8)
        body_layout.addWidget(splitter)

        # 各工具视图，顺序与 ToolView 一致
        self.graph_canvas = GitGraphCanvas(self.studio)
        self.graph_canvas.zoom_anchor_to_pointer = self.settings.get_zoom_anchor_to_pointer()
        self.branches_view = BranchesView()
        self.files_view = FilesView()
        self.stats_view = StatsView()
        self.history_view = HistoryView()
        self.views = {
            ToolView.GRAPH: self.graph_canvas,
            ToolView.BRANCHES: self.branches_view,
            ToolView.FILES: self.files_view,
            ToolView.STATS: self.stats_view,
            ToolView.HISTORY: self.history_view,
        }
        self.stack = QStackedWidget()
        for view in ToolView:
            self.stack.addWidget(self.views[view])
        splitter.addWidget(self.stack)

        # 右侧信息面板
        self.info_panel = InfoPanel()
        self.info_panel.show_summary("NO REPOSITORY", [("HINT", "Open or drop a git repository folder")])
        splitter.addWidget(self.info_panel)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        # 信号连接
        self.top_bar.open_folder_requested.connect(self.open_folder_dialog)
        self.top_bar.recent_folder_selected.connect(self.open_folder)
        self.top_bar.clear_recent_folders_requested.connect(self.clear_recent_folders)
        self.top_bar.zoom_in_requested.connect(self.graph_canvas.zoom_in)
        self.top_bar.zoom_out_requested.connect(self.graph_canvas.zoom_out)
        self.top_bar.reset_view_requested.connect(self.graph_canvas.reset_view)
        self.side_bar.tool_selected.connect(self.switch_tool)
        self.graph_canvas.commit_selected.connect(self.info_panel.show_commit)
        self.history_view.commit_clicked.connect(self.show_commit_details)

        self.update_recent_menu_on_top_bar()
        self.switch_tool(ToolView.GRAPH)

    # --- view management ---

    def switch_tool(self, view: ToolView):
        self.studio.switch_tool(view)
        self.side_bar.set_active(view)
        self.top_bar.set_title(view.title)
        self.stack.setCurrentWidget(self.views[view])
        if self.studio.is_loaded:
            self.refresh_view(view)

    def refresh_view(self, view: ToolView):
        widget = self.views[view]
        if view == ToolView.GRAPH:
            widget.update()
        else:
            widget.refresh(self.studio)

    def show_commit_details(self, commit_id: str):
        details = self.studio.select_commit(commit_id)
        if details is not None:
            self.info_panel.show_commit(details)
            self.graph_canvas.update()

    # --- repository loading ---

    def open_folder_dialog(self):
        """打开文件夹选择对话框"""
        folder_path = QFileDialog.getExistingDirectory(self, self.tr("Select Git Repository"))
        if folder_path:
            self.open_folder(folder_path)

    def open_folder(self, folder_path: str):
        generation = self.studio.begin_load(folder_path)
        self.top_bar.set_status(*self.studio.status)

        loader = RepositoryLoader(folder_path, self.settings.get_history_depth())
        thread = RepositoryLoadThread(generation, loader, self)
        thread.loaded.connect(self.on_repository_loaded)
        thread.error.connect(self.on_repository_load_failed)
        thread.finished.connect(self._forget_thread)
        self._load_threads.append(thread)
        thread.start()

    def on_repository_loaded(self, generation, data, loader=None):
        if not self.studio.apply_loaded(generation, data, loader):
            return

        self.settings.add_recent_folder(data.path)
        self.update_recent_menu_on_top_bar()
        self.top_bar.set_status(*self.studio.status)
        self.info_panel.show_summary("REPOSITORY LOADED", self.studio.repository_summary())
        self.setWindowTitle(f"{self.tr('Git Studio')} - {data.path}")
        self.switch_tool(ToolView.GRAPH)

    def on_repository_load_failed(self, generation, message):
        if self.studio.apply_failed(generation, message):
            self.top_bar.set_status(*self.studio.status)

    def _forget_thread(self):
        thread = self.sender()
        if thread in self._load_threads:
            self._load_threads.remove(thread)
            thread.deleteLater()

    # --- recent folders ---

    def update_recent_menu_on_top_bar(self):
        recent_folders = self.settings.get_recent_folders()
        valid_recent_folders = [f for f in recent_folders if os.path.exists(f)]
        self.top_bar.update_recent_menu(valid_recent_folders)

    def clear_recent_folders(self):
        """清除最近文件夹记录"""
        self.settings.settings["recent_folders"] = []
        self.settings.settings["last_folder"] = None
        self.settings.save_settings()
        self.update_recent_menu_on_top_bar()

    # --- drag and drop ---

    def dragEnterEvent(self, event):
        if self._dropped_folder(event) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        folder_path = self._dropped_folder(event)
        if folder_path is None:
            event.ignore()
            return
        event.acceptProposedAction()
        logging.info("Folder dropped: %s", folder_path)
        self.open_folder(folder_path)

    def _dropped_folder(self, event):
        mime_data = event.mimeData()
        if not mime_data.hasUrls():
            return None
        for url in mime_data.urls():
            path = url.toLocalFile()
            if path and os.path.isdir(path):
                return path
        return None

    def closeEvent(self, event):
        self.settings.save_window_size(self.width(), self.height())
        for thread in list(self._load_threads):
            thread.wait()
        super().closeEvent(event)
