# src/retro_decompiler/render/text.py
"""
DecodedView をプレーンテキストの表に変換するレンダラ。
"""
from typing import List

from retro_decompiler.core.argument import GotoIcon
from retro_decompiler.core.view import DecodedView, GapMarker

GAP_TEXT = "•••"

# ジャンプ種別の1文字表記
GOTO_GLYPHS = {
    GotoIcon.CONDITIONAL: "?",
    GotoIcon.STRONG: "!",
}


# @intent:responsibility ビューの各行・ギャップマーカーを1行ずつの文字列にします。
def render_text(view: DecodedView) -> List[str]:
    lines = []
    for entry in view:
        if isinstance(entry, GapMarker):
            lines.append(GAP_TEXT)
            continue

        goto = GOTO_GLYPHS.get(entry.goto, " ")
        mnemonic = entry.mnemonic or ""
        argument = entry.argument.format() if entry.argument else ""
        pointer = f"#{entry.target.to_hex()}" if entry.target is not None else ""

        line = f"{entry.address!s:>4}  {entry.value_text}  {goto} {mnemonic:<8} {argument:<12} {pointer:<6} {entry.comment}"
        lines.append(line.rstrip())
    return lines
