import html

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QTextBrowser, QTextEdit

from git_studio import CommitDetails

# 变更文件列表最多显示的条目
MAX_CHANGES_TO_SHOW = 50


class InfoPanel(QTextBrowser):
    """
    右侧信息面板
    显示仓库概要或选中提交的详细信息
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMinimumWidth(260)
        self.setStyleSheet(
            """
            background-color: #f5f5f5;
            border: 1px solid #ddd;
            font-family: monospace;
            padding: 5px;
        """
        )
        self.setFrameShape(QTextEdit.Shape.NoFrame)
        self.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.TextSelectableByKeyboard
        )

    def show_summary(self, title: str, items: list[tuple[str, str]]):
        """显示标题加若干 (标签, 值) 行"""
        rows = "".join(
            f"<p><b>{html.escape(label)}</b><br>{html.escape(str(value))}</p>" for label, value in items
        )
        self.setHtml(f"<h3>{html.escape(title)}</h3>{rows}")

    def show_commit(self, details: CommitDetails):
        message = html.escape(details.message.strip())
        info_line = f"{details.short_id} {html.escape(details.author)} on {details.date}"

        if details.is_root:
            changes_html = "<p>Initial commit (no parent)</p>"
        elif not details.changes:
            changes_html = "<p>No file changes</p>"
        else:
            shown = details.changes[:MAX_CHANGES_TO_SHOW]
            lines = "<br>".join(f"{c.change_type} {html.escape(c.path)}" for c in shown)
            hidden = len(details.changes) - len(shown)
            more = f"<br>(+{hidden} more)" if hidden > 0 else ""
            changes_html = f"<p><b>CHANGES</b><br>{lines}{more}</p>"

        self.setHtml(
            "<h3>SELECTED COMMIT</h3>"
            f"<p><b>HASH</b><br>{details.short_id}</p>"
            f"<p><b>AUTHOR</b><br>{html.escape(details.author)}</p>"
            f"<p><b>MESSAGE</b></p>"
            f"<pre style='white-space: pre-wrap; word-wrap: break-word;'>{message}</pre>"
            f"<p>{info_line}</p>"
            f"{changes_html}"
        )
