"""
診断メッセージを表示するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor
from PySide6.QtCore import Signal

from retro_decompiler.diagnostics.output import Message
from retro_decompiler.ui.fonts import get_monospace_font

# @intent:responsibility 分類ごとに色分けしたメッセージ一覧を表示し、位置付きメッセージからのジャンプを提供します。
class OutputView(QWidget):
    # 位置付きメッセージがダブルクリックされたときに Address を通知する
    location_activated = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(2)
        self.table.setHorizontalHeaderLabels(["Where", "Message"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setStyleSheet("QTableWidget { background-color: #121212; gridline-color: #303030; } QHeaderView::section { background-color: #252525; color: #BBBBBB; }")
        self.table.cellDoubleClicked.connect(self._on_double_clicked)

        self.layout.addWidget(self.table)
        self._messages: List[Message] = []

    def update_messages(self, messages: List[Message]):
        """
        メッセージ一覧を置き換えて表示します。
        """
        self._messages = list(messages)
        self.table.setRowCount(len(self._messages))
        for row, message in enumerate(self._messages):
            color = QColor(message.level.color)
            where_item = QTableWidgetItem(message.location_text or "")
            text_item = QTableWidgetItem(message.text)
            where_item.setForeground(color)
            text_item.setForeground(color)
            if message.location is not None:
                font = where_item.font()
                font.setUnderline(True)
                where_item.setFont(font)
            self.table.setItem(row, 0, where_item)
            self.table.setItem(row, 1, text_item)

    def _on_double_clicked(self, row: int, column: int):
        if 0 <= row < len(self._messages):
            location = self._messages[row].location
            if location is not None:
                self.location_activated.emit(location)
