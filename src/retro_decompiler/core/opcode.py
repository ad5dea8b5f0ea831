# retro_decompiler/core/opcode.py
"""
未デコードの16bit命令語(オペレーションコード)を表す値型。
"""
from dataclasses import dataclass, field

from retro_decompiler.core.hexfmt import parse_hex

OPCODE_BITS = 16


# @intent:responsibility 1命令分の生の16bit値を保持します。
@dataclass(frozen=True)
class OpCode:
    """
    16bitのオペレーションコード。表示は4桁ゼロ埋めの小文字16進です。
    """
    value: int = field(default=0)

    # データのみのアドレスに表示するプレースホルダー
    PLACEHOLDER_TEXT = "0000"

    def __post_init__(self):
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"Operation code {self.value} is not a 16-bit value.")

    # @intent:responsibility 最大4桁の16進テキストを解析します（短い場合はゼロ拡張）。
    @classmethod
    def parse(cls, text: str) -> "OpCode":
        return cls(parse_hex(text, OPCODE_BITS))

    # @intent:rationale 16bitの符号なし値として、同じ値のintとも等しいものとして扱います。
    def __eq__(self, other) -> bool:
        if isinstance(other, OpCode):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)

    def __str__(self) -> str:
        return format(self.value, "04x")
