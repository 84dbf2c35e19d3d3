import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from git_studio_window import GitStudioWindow

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"


def setup_logging():
    # 根据环境变量设置日志级别
    log_level = logging.DEBUG if os.getenv("DEBUG") == "1" else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # add file handler
    if os.getenv("LOG_TO_FILE") == "1":
        file_handler = logging.FileHandler("git_studio.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)


def main():
    setup_logging()
    app = QApplication(sys.argv)

    window = GitStudioWindow()
    window.show()

    # 命令行传入仓库路径时直接打开
    if len(sys.argv) > 1:
        window.open_folder(os.path.abspath(sys.argv[1]))

    window.activateWindow()
    window.raise_()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
