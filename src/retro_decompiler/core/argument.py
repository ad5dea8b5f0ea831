# retro_decompiler/core/argument.py
"""
Core Layer (引数モデル)

アドレッシングモードごとの命令引数を表す閉じたタグ付き共用体です。
各モードは「参照先アドレスの解決方法」と「表示文字列」を定義します。
モードを追加・削除する場合は、ArgumentKind を分岐する全ての箇所
(target, format) を更新する必要があります。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from retro_decompiler.core.address import Address, as_address
from retro_decompiler.core.hexfmt import split_sign


# @intent:responsibility ジャンプの種類（条件付き / 無条件）を表すタグ。
class GotoIcon(Enum):
    CONDITIONAL = "conditional"
    STRONG = "strong"


# @intent:responsibility アドレッシングモードの閉じた集合を定義します。
class ArgumentKind(Enum):
    ABSOLUTE = "absolute"
    OFFSET = "offset"
    POINTER = "pointer"
    POINTER_INC = "pointer-inc"
    POINTER_DEC = "pointer-dec"
    STACK = "stack"
    CONST = "const"

    # @intent:responsibility このモードがメモリ上のアドレスを参照するかを返します。
    @property
    def references_memory(self) -> bool:
        return self not in (ArgumentKind.STACK, ArgumentKind.CONST)


# @intent:responsibility 1つの命令引数（モード + ペイロード）を不変に保持します。
# @intent:rationale ABSOLUTEはAddressを、それ以外は符号付きバイトをペイロードとして持ちます。
@dataclass(frozen=True)
class Argument:
    """
    命令の引数。ファクトリメソッド (Argument.absolute, Argument.offset, ...) で生成します。
    """
    kind: ArgumentKind
    value: Union[Address, int]

    def __post_init__(self):
        if self.kind is ArgumentKind.ABSOLUTE:
            object.__setattr__(self, "value", as_address(self.value))
        elif not isinstance(self.value, int) or not -0x80 <= self.value <= 0x7F:
            raise ValueError(f"{self.kind.name} argument requires a signed byte, got {self.value!r}")

    @classmethod
    def absolute(cls, address: Union[int, Address]) -> "Argument":
        return cls(ArgumentKind.ABSOLUTE, as_address(address))

    @classmethod
    def offset(cls, value: int) -> "Argument":
        return cls(ArgumentKind.OFFSET, value)

    @classmethod
    def pointer(cls, value: int) -> "Argument":
        return cls(ArgumentKind.POINTER, value)

    @classmethod
    def pointer_inc(cls, value: int) -> "Argument":
        return cls(ArgumentKind.POINTER_INC, value)

    @classmethod
    def pointer_dec(cls, value: int) -> "Argument":
        return cls(ArgumentKind.POINTER_DEC, value)

    @classmethod
    def stack(cls, value: int) -> "Argument":
        return cls(ArgumentKind.STACK, value)

    @classmethod
    def const(cls, value: int) -> "Argument":
        return cls(ArgumentKind.CONST, value)

    # @intent:responsibility 命令自身のアドレスから参照先アドレスを解決します。
    # @intent:post-condition STACK / CONST はメモリを参照しないため None を返します。
    def target(self, row_address: Union[int, Address]) -> Optional[Address]:
        kind = self.kind
        if kind is ArgumentKind.ABSOLUTE:
            return self.value
        elif kind in (ArgumentKind.OFFSET, ArgumentKind.POINTER,
                      ArgumentKind.POINTER_INC, ArgumentKind.POINTER_DEC):
            return as_address(row_address) + self.value
        elif kind in (ArgumentKind.STACK, ArgumentKind.CONST):
            return None
        raise ValueError(f"Unhandled argument kind: {kind}")

    # @intent:responsibility 引数の表示文字列を生成します。符号と絶対値は分離して整形します。
    def format(self) -> str:
        kind = self.kind
        if kind is ArgumentKind.ABSOLUTE:
            return f"$0x{self.value:03x}"

        sign, magnitude = split_sign(self.value)
        if kind is ArgumentKind.OFFSET:
            return f"{sign}0x{magnitude}"
        elif kind is ArgumentKind.POINTER:
            return f"*{sign}0x{magnitude})"
        elif kind is ArgumentKind.POINTER_INC:
            return f"*{sign}0x{magnitude}++"
        elif kind is ArgumentKind.POINTER_DEC:
            return f"--*{sign}0x{magnitude}"
        elif kind is ArgumentKind.STACK:
            return f"SP{sign or '+'}0x{magnitude}"
        elif kind is ArgumentKind.CONST:
            return f"#{sign}0x{magnitude}"
        raise ValueError(f"Unhandled argument kind: {kind}")

    def __str__(self) -> str:
        return self.format()
