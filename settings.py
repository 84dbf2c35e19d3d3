import json
import logging
import os
from pathlib import Path

from repository_loader import DEFAULT_HISTORY_DEPTH


def default_config_dir() -> str:
    override = os.getenv("GIT_STUDIO_HOME")
    if override:
        return override
    return os.path.join(str(Path.home()), ".git_studio")


class Settings:
    def __init__(self, config_dir=None):
        # 配置目录
        self.config_dir = config_dir or default_config_dir()
        self.config_file = os.path.join(self.config_dir, "settings.json")

        # 默认设置
        self.settings = {
            "recent_folders": [],  # 最近打开的仓库列表
            "last_folder": None,  # 上次打开的仓库
            "max_recent": 10,  # 最大记录数
            "history_depth": DEFAULT_HISTORY_DEPTH,  # 读取的提交数量上限
            "zoom_anchor_to_pointer": False,  # 滚轮缩放是否以鼠标位置为中心
            "window_size": [1100, 700],
        }

        # 加载已有设置
        self.load_settings()

    def load_settings(self):
        """加载设置"""
        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, "r", encoding="utf-8") as f:
                    saved_settings = json.load(f)
                    self.settings.update(saved_settings)
        except (OSError, ValueError) as e:
            logging.warning("加载设置失败：%s", e)

    def save_settings(self):
        """保存设置"""
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self.settings, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logging.warning("保存设置失败：%s", e)

    def add_recent_folder(self, folder_path):
        """添加最近打开的仓库"""
        self.settings["last_folder"] = folder_path

        recent = self.settings["recent_folders"]
        # 如果已经在列表中，先移除
        if folder_path in recent:
            recent.remove(folder_path)
        # 添加到列表开头
        recent.insert(0, folder_path)
        # 保持列表在最大长度以内
        self.settings["recent_folders"] = recent[: self.settings["max_recent"]]

        self.save_settings()

    def get_recent_folders(self):
        return self.settings["recent_folders"]

    def get_last_folder(self):
        return self.settings["last_folder"]

    def get_history_depth(self) -> int:
        depth = self.settings.get("history_depth", DEFAULT_HISTORY_DEPTH)
        if not isinstance(depth, int) or depth <= 0:
            logging.warning("Invalid history_depth %r, using %d", depth, DEFAULT_HISTORY_DEPTH)
            return DEFAULT_HISTORY_DEPTH
        return depth

    def get_zoom_anchor_to_pointer(self) -> bool:
        return bool(self.settings.get("zoom_anchor_to_pointer", False))

    def get_window_size(self):
        return tuple(self.settings.get("window_size", [1100, 700]))

    def save_window_size(self, width, height):
        self.settings["window_size"] = [width, height]
        self.save_settings()


# 创建全局 settings 实例
settings = Settings()
