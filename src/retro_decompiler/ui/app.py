# src/retro_decompiler/ui/app.py
"""
Qtアプリケーションのエントリポイント。
引数にセッション設定(YAML)を渡すと、起動時に読み込んでデコードします。
"""
import sys
from PySide6.QtWidgets import QApplication
from .main_window import MainWindow

def main():
    app = QApplication(sys.argv)
    main_win = MainWindow()
    if len(sys.argv) > 1:
        try:
            main_win.load_session_config(sys.argv[1])
        except (OSError, ValueError) as e:
            print(f"Warning: Failed to load session config '{sys.argv[1]}': {e}", file=sys.stderr)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
