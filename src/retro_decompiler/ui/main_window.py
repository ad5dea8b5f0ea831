# src/retro_decompiler/ui/main_window.py
"""
メインウィンドウの実装。
入力欄（先頭アドレス・バイトコード）、逆アセンブル表、診断出力を配置し、
デコード要求ごとにセッションを作り直します。
"""
from typing import List, Optional

from PySide6.QtWidgets import (QMainWindow, QApplication, QDockWidget, QToolBar, QLabel, QLineEdit,
                               QPlainTextEdit, QTextEdit, QFileDialog, QMessageBox)
from PySide6.QtGui import QPalette, QColor, QAction, QTextCharFormat, QTextCursor
from PySide6.QtCore import Qt, Slot

from retro_decompiler.config.loader import ConfigLoader
from retro_decompiler.core.address import Address
from retro_decompiler.core.bytecode import prepare_lines
from retro_decompiler.core.errors import FormatError
from retro_decompiler.core.view import DecodedView
from retro_decompiler.decoder.table import TableDecoder
from retro_decompiler.diagnostics.output import Message, MessageLevel, Output
from retro_decompiler.session.page import DecompilerSession
from .code_view import DecompiledView
from .output_view import OutputView
from .fonts import get_monospace_font, get_monospace_font_family

# @intent:responsibility アプリケーションのメインウィンドウを定義し、入力・表示・出力を結び付けます。
class MainWindow(QMainWindow):
    def __init__(self, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro Decompiler")
        self.setGeometry(100, 100, 1200, 800)

        self.decoder = TableDecoder()
        self.session: Optional[DecompilerSession] = None

        self._set_dark_theme()
        self._create_toolbar()
        self._create_views()
        self._create_menus()

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_config_action = QAction("Load Session Config...", self)
        self.load_config_action.setShortcut("Ctrl+O")
        self.load_config_action.triggered.connect(self._load_session_config)
        file_menu.addAction(self.load_config_action)

    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        toolbar.addWidget(QLabel("First address: "))
        self.address_edit = QLineEdit("000")
        self.address_edit.setMaximumWidth(80)
        self.address_edit.returnPressed.connect(self.decompile)
        toolbar.addWidget(self.address_edit)

        self.decompile_action = QAction("Decompile", self)
        self.decompile_action.setShortcut("Ctrl+Return")
        self.decompile_action.triggered.connect(self.decompile)
        toolbar.addAction(self.decompile_action)

    # @intent:responsibility 入力欄・逆アセンブル表・出力欄を作成します。
    def _create_views(self):
        self.code_view = DecompiledView()
        self.code_view.source_requested.connect(self._select_source_line)
        self.setCentralWidget(self.code_view)

        bytecode_dock = QDockWidget("Bytecode", self)
        bytecode_dock.setAllowedAreas(Qt.LeftDockWidgetArea)
        self.bytecode_edit = QPlainTextEdit()
        self.bytecode_edit.setFont(get_monospace_font(10))
        self.bytecode_edit.setPlaceholderText("One operation code per line (hex)")
        bytecode_dock.setWidget(self.bytecode_edit)
        self.addDockWidget(Qt.LeftDockWidgetArea, bytecode_dock)

        output_dock = QDockWidget("Output", self)
        output_dock.setAllowedAreas(Qt.BottomDockWidgetArea)
        self.output_view = OutputView()
        self.output_view.location_activated.connect(self._jump_to_location)
        output_dock.setWidget(self.output_view)
        self.addDockWidget(Qt.BottomDockWidgetArea, output_dock)

    def set_input(self, first_address: str, bytecode: str):
        self.address_edit.setText(first_address)
        self.bytecode_edit.setPlainText(bytecode)

    # @intent:responsibility 現在の入力から新しいセッションを作り、デコード結果で表示を置き換えます。
    @Slot()
    def decompile(self) -> Optional[DecodedView]:
        output = Output()
        self.session = DecompilerSession.open(self.address_edit.text(), self.bytecode_edit.toPlainText(), output)

        try:
            Address.parse(self.address_edit.text())
            self.address_edit.setStyleSheet("")
        except FormatError:
            self.address_edit.setStyleSheet("background-color: coral; color: black;")

        view = None
        if self.session is not None:
            view = self.session.decompile(self.decoder)
            self.code_view.update_view(view)
        else:
            self.code_view.reset_cache()

        self._highlight_invalid_lines(output.messages)
        self.output_view.update_messages(output.messages)
        return view

    # @intent:responsibility 位置付きエラーとなった入力行を赤字で強調します。
    def _highlight_invalid_lines(self, messages: List[Message]):
        invalid_format = QTextCharFormat()
        invalid_format.setForeground(QColor("red"))

        selections = []
        for message in messages:
            if message.level is not MessageLevel.ERROR or message.location is None:
                continue
            block_number = self._source_block_number(message.location)
            if block_number is None:
                continue
            selection = QTextEdit.ExtraSelection()
            selection.format = invalid_format
            selection.cursor = self._line_cursor(block_number)
            selections.append(selection)
        self.bytecode_edit.setExtraSelections(selections)

    @Slot(object)
    def _jump_to_location(self, address: Address):
        self.code_view.scroll_to_address(address)
        self._select_source_line(address)

    # @intent:responsibility アドレスを、空行を含めたバイトコード入力欄のブロック番号(0始まり)に変換します。
    def _source_block_number(self, address: Address) -> Optional[int]:
        try:
            first = Address.parse(self.address_edit.text())
        except FormatError:
            return None
        lines = prepare_lines(self.bytecode_edit.toPlainText())
        position = address - first
        if position >= len(lines):
            return None
        return lines[position].number - 1

    def _line_cursor(self, block_number: int) -> QTextCursor:
        cursor = QTextCursor(self.bytecode_edit.document().findBlockByNumber(block_number))
        cursor.select(QTextCursor.LineUnderCursor)
        return cursor

    # @intent:responsibility アドレスに対応するバイトコード入力行を選択します。
    @Slot(object)
    def _select_source_line(self, address: Address):
        block_number = self._source_block_number(address)
        if block_number is None:
            return
        self.bytecode_edit.setTextCursor(self._line_cursor(block_number))
        self.bytecode_edit.setFocus()

    @Slot()
    def _load_session_config(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Session Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self.load_session_config(file_name)
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Failed to load session config: {e}")

    # @intent:responsibility セッション設定を読み込み、入力欄とデコーダを置き換えてデコードします。
    def load_session_config(self, path: str) -> Optional[DecodedView]:
        config = ConfigLoader().load_from_file(path)
        self.decoder = TableDecoder.from_config(config.decoder)
        self.set_input(config.first_address, config.bytecode)
        return self.decompile()

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        dark_palette.setColor(QPalette.HighlightedText, QColor(0, 0, 0))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow, QToolBar {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
        """)
