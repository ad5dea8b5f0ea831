"""
デコード結果(DecodedView)を表示するウィジェット。
"""
from typing import Dict, List, Optional, Union

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor
from PySide6.QtCore import Qt, Signal

from retro_decompiler.core.address import Address, as_address
from retro_decompiler.core.argument import GotoIcon
from retro_decompiler.core.view import DecodedView, GapMarker, ViewRow
from retro_decompiler.render.text import GAP_TEXT, GOTO_GLYPHS
from retro_decompiler.ui.fonts import get_monospace_font

COLUMNS = ["Address", "Value", "Icons", "Mnemonic", "Argument", "Pointer", "Comment"]
COL_ADDRESS, COL_VALUE, COL_ICONS, COL_MNEMONIC, COL_ARGUMENT, COL_POINTER, COL_COMMENT = range(len(COLUMNS))

GOTO_COLORS = {
    GotoIcon.CONDITIONAL: QColor("#E0C040"),
    GotoIcon.STRONG: QColor("#E06040"),
}

# @intent:responsibility DecodedViewを表形式で表示し、ポインタ列からの参照先ジャンプを提供します。
class DecompiledView(QWidget):
    """
    逆アセンブル結果を表示するウィジェット。
    ギャップマーカーは全列を結合した行として表示します。
    """
    # 命令行の Address セルがクリックされたとき、入力欄の該当行を示すために発行する
    source_requested = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        for col in range(len(COLUMNS) - 1):
            self.table.horizontalHeader().setSectionResizeMode(col, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(COL_COMMENT, QHeaderView.Stretch)

        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB; gridline-color: #303030;")
        self.table.cellClicked.connect(self._on_cell_clicked)

        self.layout.addWidget(self.table)

        self.view: Optional[DecodedView] = None
        # アドレス -> テーブル行番号
        self._row_index: Dict[Address, int] = {}
        # テーブル行番号 -> ViewRow (ギャップ行は含まない)
        self._rows: Dict[int, ViewRow] = {}

    # @intent:responsibility ビュー全体を描き直します。デコードのたびに呼び出されます。
    def update_view(self, view: DecodedView):
        self.reset_cache()
        self.view = view
        entries = list(view)
        self.table.setRowCount(len(entries))

        dim = QColor("#606060")
        for table_row, entry in enumerate(entries):
            if isinstance(entry, GapMarker):
                item = QTableWidgetItem(GAP_TEXT)
                item.setTextAlignment(Qt.AlignCenter)
                item.setForeground(dim)
                self.table.setItem(table_row, 0, item)
                self.table.setSpan(table_row, 0, 1, len(COLUMNS))
                continue

            self._row_index[entry.address] = table_row
            self._rows[table_row] = entry
            cells = self._cells_for(entry)
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if not entry.is_code:
                    item.setForeground(dim)
                elif col == COL_ICONS and entry.goto is not None:
                    item.setForeground(GOTO_COLORS[entry.goto])
                elif col == COL_POINTER and entry.target is not None:
                    item.setForeground(QColor("#2A82DA"))
                self.table.setItem(table_row, col, item)

    def _cells_for(self, row: ViewRow) -> List[str]:
        icons = GOTO_GLYPHS.get(row.goto, "")
        if row.argument is not None:
            icons += f" {row.argument.kind.value}"
        return [
            str(row.address),
            row.value_text,
            icons.strip(),
            row.mnemonic or "",
            row.argument.format() if row.argument is not None else "",
            f"#{row.target.to_hex()}" if row.target is not None else "",
            row.comment,
        ]

    def row_for_address(self, address: Union[int, Address]) -> Optional[int]:
        return self._row_index.get(as_address(address))

    # @intent:responsibility 指定アドレスの行を選択し、見える位置までスクロールします。
    def scroll_to_address(self, address: Union[int, Address]) -> bool:
        table_row = self.row_for_address(address)
        if table_row is None:
            return False
        self.table.selectRow(table_row)
        self.table.scrollToItem(self.table.item(table_row, COL_ADDRESS), QTableWidget.PositionAtCenter)
        return True

    def _on_cell_clicked(self, table_row: int, column: int):
        row = self._rows.get(table_row)
        if row is None:
            return
        if column == COL_POINTER and row.target is not None:
            self.scroll_to_address(row.target)
        elif column == COL_ADDRESS and row.is_code:
            self.source_requested.emit(row.address)

    def reset_cache(self):
        """
        表示中の行と索引をクリアします。
        """
        self.view = None
        self._row_index = {}
        self._rows = {}
        self.table.clearSpans()
        self.table.setRowCount(0)
