# retro_decompiler/core/hexfmt.py
"""
16進テキストの解析と整形のユーティリティ。
入力は大文字小文字を区別せず、出力は常に小文字です。
"""
import re
from typing import Tuple

from retro_decompiler.core.errors import FormatError

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")


# @intent:utility_function 符号なし16進テキストを指定ビット幅の整数に変換します。
# @intent:pre-condition 接頭辞(0x)や符号は受け付けません。前後の空白は無視します。
def parse_hex(text: str, bits: int) -> int:
    stripped = text.strip()
    max_digits = (bits + 3) // 4
    if not _HEX_DIGITS.match(stripped) or len(stripped) > max_digits:
        raise FormatError(f"Invalid {bits}-bit hexadecimal value: {text!r}", text=text)
    value = int(stripped, 16)
    if value >= (1 << bits):
        raise FormatError(f"Value {text!r} exceeds {bits} bits", text=text)
    return value


# @intent:utility_function 8bitの生の値を符号付きバイト(-128..127)として解釈します。
def to_signed_byte(value: int) -> int:
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


# @intent:utility_function 符号と絶対値の16進表現を分離します。
def split_sign(value: int) -> Tuple[str, str]:
    """
    (-2) -> ("-", "2"), 0x1F -> ("", "1f")
    """
    if value < 0:
        return "-", format(-value, "x")
    return "", format(value, "x")
