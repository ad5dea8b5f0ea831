# retro_decompiler/core/bytecode.py
"""
Core Layer (オペレーションコード・ストア)

先頭アドレスに固定された、連続するオペレーションコードの配列を保持します。
論理位置 i の値はアドレス first_address + i (ラップアラウンドあり) に存在します。
構築後は読み取り専用です。
"""
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Union

from retro_decompiler.core.address import ADDRESS_SPACE, Address, as_address
from retro_decompiler.core.errors import CapacityError, FormatError, ParseFailure
from retro_decompiler.core.opcode import OpCode


# @intent:data_structure 空行を除いた入力の1行。元の行番号を保持します。
class SourceLine(NamedTuple):
    number: int
    text: str


# @intent:data_structure 反復時に返される (アドレス, コード) の組。
class Row(NamedTuple):
    address: Address
    code: OpCode


# @intent:utility_function 生の入力から空行を取り除き、行番号付きで返します。
def prepare_lines(raw: Union[str, Iterable[str]]) -> List[SourceLine]:
    """
    文字列の場合は '\\n' で分割します。空白のみの行は命令としてカウントしません。
    """
    if isinstance(raw, str):
        raw = raw.split("\n")
    return [SourceLine(number, text) for number, text in enumerate(raw, 1) if text.strip()]


# @intent:responsibility オペレーションコードをアドレスと対応付けて保持するコレクション。
class OperationCodeStore:
    """
    アドレスでO(1)参照できる、オペレーションコードの連続バッファ。
    """
    # @intent:pre-condition codesの個数はアドレス空間の大きさ(0x10000)以下である必要があります。
    def __init__(self, first_address: Union[int, Address], codes: Sequence[OpCode]):
        if len(codes) > ADDRESS_SPACE:
            raise CapacityError(len(codes), ADDRESS_SPACE)
        self._first_address = as_address(first_address)
        self._codes: List[OpCode] = list(codes)

    # @intent:responsibility 生のテキスト行を解析してストアを構築します。
    # @intent:post-condition 容量超過はCapacityError、書式不正はFormatError（不正な全行を含む）。
    #                        いずれの場合も部分的なストアは返しません。
    @classmethod
    def build(cls, first_address: Union[int, Address], raw_lines: Union[str, Iterable[str]]) -> "OperationCodeStore":
        first = as_address(first_address)
        lines = prepare_lines(raw_lines)
        if len(lines) > ADDRESS_SPACE:
            raise CapacityError(len(lines), ADDRESS_SPACE)

        codes: List[OpCode] = []
        failures: List[ParseFailure] = []
        for position, line in enumerate(lines):
            try:
                codes.append(OpCode.parse(line.text))
            except FormatError:
                failures.append(ParseFailure(line.number, position, first + position, line.text))

        if failures:
            bad = ", ".join(str(f.number) for f in failures)
            raise FormatError(f"Invalid format of operation code on line(s) {bad}", failures=failures)
        return cls(first, codes)

    @property
    def first_address(self) -> Address:
        return self._first_address

    # @intent:post-condition 空のストアでは first_address - 1 (ラップ) を返します。
    @property
    def last_address(self) -> Address:
        return self._first_address + (len(self._codes) - 1)

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, (int, Address)):
            return False
        return (as_address(address) - self._first_address) < len(self._codes)

    # @intent:responsibility アドレスに対応するオペレーションコードを返します。
    # @intent:pre-condition アドレスは [first_address, first_address + len) の範囲内である必要があります。
    def __getitem__(self, address: Union[int, Address]) -> OpCode:
        index = as_address(address) - self._first_address
        if index >= len(self._codes):
            raise IndexError(f"Address {as_address(address)} is outside of stored operations.")
        return self._codes[index]

    # @intent:responsibility 全ての命令を昇順アドレスで (address, code) として列挙します。
    def __iter__(self) -> Iterator[Row]:
        for i, code in enumerate(self._codes):
            yield Row(self._first_address + i, code)

    def __repr__(self) -> str:
        return f"OperationCodeStore(first_address={self._first_address!r}, length={len(self._codes)})"
