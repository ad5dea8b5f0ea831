# retro_decompiler/core/address.py
"""
Core Layer (アドレス演算)

16bit固定幅の符号なしアドレスを表す不変の値型を定義します。
加減算は全て 2^16 を法としてラップアラウンドし、失敗しません。
"""
from dataclasses import dataclass, field
from typing import Union

from retro_decompiler.core.hexfmt import parse_hex

ADDRESS_BITS = 16
ADDRESS_SPACE = 1 << ADDRESS_BITS
MAX_ADDRESS = ADDRESS_SPACE - 1


# @intent:responsibility ラップアラウンド演算を持つ16bitアドレスを表現します。
# @intent:rationale 生成時に 2^16 で正規化するため、比較・ハッシュは正規化後の数値で行われます。
@dataclass(frozen=True, order=True)
class Address:
    """
    16bitアドレス。一度生成されたら変更されません。

    >>> Address(0xFFFF) + 1
    Address(value=0x000)
    >>> Address(0x020) + (-2)
    Address(value=0x01e)
    """
    value: int = field(default=0)

    def __post_init__(self):
        object.__setattr__(self, "value", int(self.value) & MAX_ADDRESS)

    # @intent:responsibility 16進テキストからAddressを生成します。
    # @intent:post-condition 不正な書式、または16bitを超える値の場合はFormatErrorを送出します。
    @classmethod
    def parse(cls, text: str) -> "Address":
        return cls(parse_hex(text, ADDRESS_BITS))

    def __add__(self, other: int) -> "Address":
        if isinstance(other, Address):
            other = other.value
        if not isinstance(other, int):
            return NotImplemented
        return Address(self.value + other)

    __radd__ = __add__

    def __sub__(self, other: Union[int, "Address"]):
        """
        Address - int はラップしたAddressを、Address - Address はラップした距離(int)を返します。
        """
        if isinstance(other, Address):
            return (self.value - other.value) & MAX_ADDRESS
        if not isinstance(other, int):
            return NotImplemented
        return Address(self.value - other)

    # intとの比較は正規化後の値で行います。ハッシュもintと一致させ、辞書のキーとして混在できるようにします。
    def __eq__(self, other) -> bool:
        if isinstance(other, Address):
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
        return format(self.value, "03x")

    def __repr__(self) -> str:
        return f"Address(value=0x{self.value:03x})"

    # @intent:utility_function パディングなしの小文字16進表現を返します。
    def to_hex(self) -> str:
        return format(self.value, "x")


# @intent:utility_function intまたはAddressをAddressに揃えます。
def as_address(value: Union[int, Address]) -> Address:
    if isinstance(value, Address):
        return value
    return Address(value)
