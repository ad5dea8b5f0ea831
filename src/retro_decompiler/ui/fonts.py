"""
UIフォント管理モジュール。

逆アセンブル表・バイトコード入力欄・出力欄は、16進数の桁を縦に揃えるため
すべて同じ等幅フォントで描画します。ここではその選択を一箇所にまとめます。
"""
from typing import Optional

from PySide6.QtGui import QFont, QFontDatabase

# 優先順位: Windows -> macOS -> Linux -> 汎用
PREFERRED_FONTS = ["Consolas", "Menlo", "Monaco", "DejaVu Sans Mono", "Courier New"]

_selected_family: Optional[str] = None

# @intent:responsibility 利用可能な等幅フォントファミリー名を一度だけ決定して返します。
def get_monospace_font_family() -> str:
    """
    PREFERRED_FONTS のうち、システムに存在する最初のフォント名を返します。
    どれも無い場合はQtのシステム既定の等幅フォントを使用します。
    結果はプロセス内でキャッシュされ、全ウィジェットで同じフォントになります。
    """
    global _selected_family
    if _selected_family is None:
        available_families = set(QFontDatabase.families())
        _selected_family = next(
            (font for font in PREFERRED_FONTS if font in available_families),
            QFontDatabase.systemFont(QFontDatabase.FixedFont).family(),
        )
    return _selected_family

# @intent:responsibility 表・入力欄用の等幅QFontを生成します。
def get_monospace_font(size: int = 10) -> QFont:
    """
    指定ポイントサイズの等幅フォントを返します。
    プロポーショナルフォントへの置き換えを防ぐため、StyleHintにMonospaceを指定します。
    """
    font = QFont(get_monospace_font_family(), size)
    font.setStyleHint(QFont.Monospace)
    font.setFixedPitch(True)
    return font
