import os
import shutil
import sys
import tempfile
import unittest

import git  # Make sure 'gitpython' is installed in the test environment

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from PyQt6.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt6.QtGui import QColor, QImage, QKeyEvent, QMouseEvent, QPainter, QWheelEvent
from PyQt6.QtWidgets import QApplication

from git_graph_data import CommitRecord
from git_graph_renderer import BACKGROUND_COLOR, GraphRenderer, PainterSurface
from git_graph_view import GitGraphCanvas
from git_studio import GitStudio, ToolView
from git_studio_window import GitStudioWindow
from repository_loader import RepositoryData
from settings import Settings
from views.top_bar_widget import TopBarWidget

AUTHOR = git.Actor("Test User", "test@example.com")


def mouse_event(event_type, pos, button=Qt.MouseButton.LeftButton):
    buttons = Qt.MouseButton.NoButton if event_type == QEvent.Type.MouseButtonRelease else Qt.MouseButton.LeftButton
    return QMouseEvent(event_type, QPointF(pos), QPointF(pos), button, buttons, Qt.KeyboardModifier.NoModifier)


def wheel_event(pos, angle_y):
    return QWheelEvent(
        QPointF(pos),
        QPointF(pos),
        QPoint(0, 0),
        QPoint(0, angle_y),
        Qt.MouseButton.NoButton,
        Qt.KeyboardModifier.NoModifier,
        Qt.ScrollPhase.NoScrollPhase,
        False,
    )


def key_event(key, modifiers=Qt.KeyboardModifier.ControlModifier):
    return QKeyEvent(QEvent.Type.KeyPress, key, modifiers)


def init_repo(path, message):
    repo = git.Repo.init(path)
    with open(os.path.join(path, "readme.txt"), "w") as f:
        f.write(message)
    repo.index.add(["readme.txt"])
    repo.index.commit(message, author=AUTHOR, committer=AUTHOR)
    repo.close()


def wait_for_loads(window):
    for thread in list(window._load_threads):
        thread.wait(10000)
    for _ in range(5):
        QApplication.processEvents()


def sample_data(path):
    records = [
        CommitRecord("c3" * 20, "Third", "alice", ["c2" * 20], timestamp=1700000300),
        CommitRecord("c2" * 20, "Second", "bob", ["c1" * 20], timestamp=1700000200),
        CommitRecord("c1" * 20, "First", "alice", [], timestamp=1700000100),
    ]
    return RepositoryData(path, records, ["main"], "main")


class QtTestCase(unittest.TestCase):
    app = None

    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance()
        if cls.app is None:
            cls.app = QApplication([])


class TestGitGraphCanvas(QtTestCase):
    def setUp(self):
        self.studio = GitStudio()
        self.studio.apply_loaded(self.studio.begin_load("/tmp/repo"), sample_data("/tmp/repo"))
        self.canvas = GitGraphCanvas(self.studio)
        self.canvas.resize(400, 300)
        self.selected = []
        self.canvas.commit_selected.connect(self.selected.append)

    def test_click_on_commit_emits_selection(self):
        node = self.studio.graph.find("c2" * 20)
        self.canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, node.position))

        self.assertEqual(len(self.selected), 1)
        self.assertEqual(self.selected[0].id, node.id)
        self.assertFalse(self.studio.viewport.is_dragging)

    def test_drag_on_empty_space_pans(self):
        self.canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, QPointF(300, 200)))
        self.canvas.mouseMoveEvent(mouse_event(QEvent.Type.MouseMove, QPointF(320, 170), Qt.MouseButton.NoButton))
        self.assertEqual(self.selected, [])
        self.assertAlmostEqual(self.studio.viewport.offset.x(), 20)
        self.assertAlmostEqual(self.studio.viewport.offset.y(), -30)

        self.canvas.mouseReleaseEvent(mouse_event(QEvent.Type.MouseButtonRelease, QPointF(320, 170)))
        self.canvas.mouseMoveEvent(mouse_event(QEvent.Type.MouseMove, QPointF(0, 0), Qt.MouseButton.NoButton))
        self.assertAlmostEqual(self.studio.viewport.offset.x(), 20)
        self.assertAlmostEqual(self.studio.viewport.offset.y(), -30)

    def test_move_without_press_is_ignored(self):
        self.canvas.mouseMoveEvent(mouse_event(QEvent.Type.MouseMove, QPointF(50, 50), Qt.MouseButton.NoButton))
        self.assertAlmostEqual(self.studio.viewport.offset.x(), 0)

    def test_zoom_buttons_and_reset(self):
        self.canvas.zoom_in()
        self.assertAlmostEqual(self.studio.viewport.scale, 1.1)
        self.canvas.zoom_out()
        self.assertAlmostEqual(self.studio.viewport.scale, 1.0)
        self.canvas.zoom_in()
        self.canvas.reset_view()
        self.assertEqual(self.studio.viewport.scale, 1.0)

    def test_wheel_up_zooms_in_around_origin(self):
        self.canvas.wheelEvent(wheel_event(QPointF(100, 100), 120))
        self.assertAlmostEqual(self.studio.viewport.scale, 1.1)
        self.assertAlmostEqual(self.studio.viewport.offset.x(), 0)
        self.assertAlmostEqual(self.studio.viewport.offset.y(), 0)

        self.canvas.wheelEvent(wheel_event(QPointF(100, 100), -120))
        self.assertAlmostEqual(self.studio.viewport.scale, 1.1 * 0.9)

    def test_wheel_anchored_to_pointer(self):
        self.canvas.zoom_anchor_to_pointer = True
        self.canvas.wheelEvent(wheel_event(QPointF(100, 100), 120))
        self.assertAlmostEqual(self.studio.viewport.scale, 1.1)
        self.assertAlmostEqual(self.studio.viewport.offset.x(), -10)
        self.assertAlmostEqual(self.studio.viewport.offset.y(), -10)

    def test_ctrl_keys_zoom_and_reset(self):
        self.canvas.keyPressEvent(key_event(Qt.Key.Key_Plus))
        self.assertAlmostEqual(self.studio.viewport.scale, 1.1)
        self.canvas.keyPressEvent(key_event(Qt.Key.Key_Equal))
        self.assertAlmostEqual(self.studio.viewport.scale, 1.21)
        self.canvas.keyPressEvent(key_event(Qt.Key.Key_Minus))
        self.assertAlmostEqual(self.studio.viewport.scale, 1.1)
        self.studio.viewport.offset = QPointF(30, 40)
        self.canvas.keyPressEvent(key_event(Qt.Key.Key_0))
        self.assertEqual(self.studio.viewport.scale, 1.0)
        self.assertAlmostEqual(self.studio.viewport.offset.x(), 0)

    def test_keys_without_ctrl_do_not_zoom(self):
        self.canvas.keyPressEvent(key_event(Qt.Key.Key_Plus, Qt.KeyboardModifier.NoModifier))
        self.assertEqual(self.studio.viewport.scale, 1.0)

    def test_painter_surface_renders(self):
        image = QImage(200, 200, QImage.Format.Format_ARGB32)
        painter = QPainter(image)
        try:
            GraphRenderer().render(PainterSurface(painter), self.studio.graph, self.studio.viewport, 200, 200)
        finally:
            painter.end()
        self.assertEqual(image.pixelColor(199, 199).name(), QColor(BACKGROUND_COLOR).name())
        # highlighted commit circle at (50, 50)
        self.assertEqual(image.pixelColor(50, 50).name(), "#00ff00")


class TestTopBarWidget(QtTestCase):
    def test_recent_menu_stays_reachable(self):
        top_bar = TopBarWidget()
        top_bar.update_recent_menu([])
        self.assertTrue(top_bar.recent_button.isEnabled())
        self.assertFalse(top_bar.clear_recent_action.isEnabled())

        top_bar.update_recent_menu(["/tmp/a", "/tmp/b"])
        self.assertTrue(top_bar.clear_recent_action.isEnabled())
        texts = [action.text() for action in top_bar.recent_menu.actions() if not action.isSeparator()]
        self.assertEqual(texts, ["/tmp/a", "/tmp/b", "Clear Recent"])


class TestGitStudioWindow(QtTestCase):
    def setUp(self):
        self.config_dir = tempfile.mkdtemp()
        self.window = GitStudioWindow()
        self.window.settings = Settings(self.config_dir)

    def tearDown(self):
        self.window.deleteLater()
        shutil.rmtree(self.config_dir)

    def test_loaded_repository_updates_views(self):
        generation = self.window.studio.begin_load(self.config_dir)
        self.window.on_repository_loaded(generation, sample_data(self.config_dir))

        self.assertEqual(self.window.top_bar.status_label.text(), "REPO LOADED")
        self.assertIs(self.window.stack.currentWidget(), self.window.graph_canvas)
        self.assertEqual(self.window.settings.get_recent_folders(), [self.config_dir])

        self.window.switch_tool(ToolView.HISTORY)
        self.assertIs(self.window.stack.currentWidget(), self.window.history_view)
        self.assertEqual(self.window.history_view.history_list.topLevelItemCount(), 3)
        self.assertEqual(self.window.top_bar.title_label.text(), "HISTORY")

        self.window.switch_tool(ToolView.STATS)
        self.assertEqual(self.window.stats_view.value_labels["Contributors"].text(), "2")

        self.window.switch_tool(ToolView.BRANCHES)
        self.assertEqual(self.window.branches_view.topLevelItem(0).text(1), "(HEAD)")

    def test_open_folder_loads_in_background(self):
        repo_path = os.path.join(self.config_dir, "repo")
        os.makedirs(repo_path)
        init_repo(repo_path, "Initial")

        self.window.open_folder(repo_path)
        self.assertEqual(self.window.top_bar.status_label.text(), "LOADING REPOSITORY...")
        wait_for_loads(self.window)

        self.assertEqual(self.window.top_bar.status_label.text(), "REPO LOADED")
        self.assertEqual(self.window.studio.repo_path, repo_path)
        self.assertEqual(self.window.studio.loader.repo_path, repo_path)
        self.assertEqual(self.window._load_threads, [])

        self.window.switch_tool(ToolView.FILES)
        self.assertEqual(self.window.files_view.topLevelItemCount(), 1)
        self.assertTrue(self.window.files_view.topLevelItem(0).text(0).endswith("readme.txt"))

    def test_newer_open_folder_replaces_older_load(self):
        old_path = os.path.join(self.config_dir, "old")
        new_path = os.path.join(self.config_dir, "new")
        for path in (old_path, new_path):
            os.makedirs(path)
            init_repo(path, os.path.basename(path))

        self.window.open_folder(old_path)
        self.window.open_folder(new_path)
        wait_for_loads(self.window)

        self.assertEqual(self.window.studio.repo_path, new_path)
        self.assertIsNotNone(self.window.studio.loader)
        self.assertEqual(self.window.studio.loader.repo_path, new_path)
        self.assertEqual(self.window.studio.graph.head.summary, "new")
        self.assertEqual(self.window.settings.get_recent_folders(), [new_path])
        self.assertEqual(self.window._load_threads, [])

    def test_open_folder_on_plain_directory_reports_error(self):
        self.window.open_folder(self.config_dir)
        wait_for_loads(self.window)

        self.assertTrue(self.window.top_bar.status_label.text().startswith("ERROR: Not a git repository"))
        self.assertFalse(self.window.studio.is_loaded)

    def test_failed_load_shows_error(self):
        generation = self.window.studio.begin_load("/nowhere")
        self.window.on_repository_load_failed(generation, "Folder does not exist: /nowhere")
        self.assertEqual(self.window.top_bar.status_label.text(), "ERROR: Folder does not exist: /nowhere")
        self.assertFalse(self.window.studio.is_loaded)

    def test_history_click_shows_details(self):
        generation = self.window.studio.begin_load(self.config_dir)
        self.window.on_repository_loaded(generation, sample_data(self.config_dir))
        self.window.show_commit_details("c1" * 20)
        self.assertIn("Initial commit", self.window.info_panel.toPlainText())
        self.assertEqual(self.window.studio.selected.id, "c1" * 20)


if __name__ == "__main__":
    unittest.main()
