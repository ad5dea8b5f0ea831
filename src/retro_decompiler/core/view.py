# retro_decompiler/core/view.py
"""
デコード結果と、表示用に整列されたビューの不変データ構造。

DecodedView はレンダリング層（テキスト / Qt）に渡される唯一の値であり、
デコードのたびに丸ごと再生成されます。
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from retro_decompiler.core.address import Address, as_address
from retro_decompiler.core.argument import Argument, GotoIcon
from retro_decompiler.core.opcode import OpCode


# @intent:responsibility 外部デコーダが1命令ごとに返す解釈結果。
@dataclass(frozen=True)
class DecompiledRow:
    mnemonic: str
    goto: Optional[GotoIcon] = None
    argument: Optional[Argument] = None
    comment: str = ""


# @intent:responsibility ビュー内の1行（命令行またはデータのみの行）。
@dataclass(frozen=True)
class ViewRow:
    """
    code が None の場合、その行は引数から参照されただけのデータアドレスです。
    """
    address: Address
    code: Optional[OpCode] = None
    decoded: Optional[DecompiledRow] = None
    target: Optional[Address] = None

    @property
    def is_code(self) -> bool:
        return self.code is not None

    @property
    def value_text(self) -> str:
        return str(self.code) if self.code is not None else OpCode.PLACEHOLDER_TEXT

    @property
    def mnemonic(self) -> Optional[str]:
        return self.decoded.mnemonic if self.decoded else None

    @property
    def goto(self) -> Optional[GotoIcon]:
        return self.decoded.goto if self.decoded else None

    @property
    def argument(self) -> Optional[Argument]:
        return self.decoded.argument if self.decoded else None

    @property
    def comment(self) -> str:
        return self.decoded.comment if self.decoded else ""


# @intent:responsibility 連続していない2行の間に挿入される合成マーカー。
@dataclass(frozen=True)
class GapMarker:
    after: Address
    before: Address


ViewEntry = Union[ViewRow, GapMarker]


# @intent:responsibility アドレス昇順に並んだ行とギャップマーカーの列。
@dataclass(frozen=True)
class DecodedView:
    entries: Tuple[ViewEntry, ...] = ()
    _index: Dict[Address, ViewRow] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))
        self._index.update((e.address, e) for e in self.entries if isinstance(e, ViewRow))

    def __iter__(self) -> Iterator[ViewEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._index)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def rows(self) -> List[ViewRow]:
        return [e for e in self.entries if isinstance(e, ViewRow)]

    @property
    def gaps(self) -> List[GapMarker]:
        return [e for e in self.entries if isinstance(e, GapMarker)]

    @property
    def addresses(self) -> List[Address]:
        return [row.address for row in self.rows]

    def row(self, address: Union[int, Address]) -> Optional[ViewRow]:
        return self._index.get(as_address(address))

    # @intent:responsibility 指定アドレスの行の直後にギャップマーカーがあるかを返します。
    def gap_after(self, address: Union[int, Address]) -> bool:
        address = as_address(address)
        return any(g.after == address for g in self.gaps)
