import logging

from PyQt6.QtCore import QThread, pyqtSignal

from repository_loader import RepositoryLoader, RepositoryLoadError


class RepositoryLoadThread(QThread):
    """在后台读取仓库提交历史的线程"""

    loaded = pyqtSignal(int, object, object)  # (generation, RepositoryData, RepositoryLoader)
    error = pyqtSignal(int, str)  # (generation, error_message)

    def __init__(self, generation: int, loader: RepositoryLoader, parent=None):
        super().__init__(parent)
        self.generation = generation
        self.loader = loader

    def run(self):
        """执行读取操作"""
        try:
            data = self.loader.load()
        except RepositoryLoadError as e:
            self.error.emit(self.generation, str(e))
            return
        except Exception as e:
            logging.exception("Unexpected error while loading %s", self.loader.repo_path)
            self.error.emit(self.generation, str(e))
            return
        self.loaded.emit(self.generation, data, self.loader)
