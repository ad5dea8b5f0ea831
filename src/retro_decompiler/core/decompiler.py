# retro_decompiler/core/decompiler.py
"""
Core Layer (デコード・マージエンジン)

オペレーションコード・ストアと外部のデコード関数から、
「命令が置かれたアドレス」と「引数から参照されるだけのアドレス」を統合した
ギャップ付きの整列ビューを生成します。
描画は行わず、純粋に DecodedView を返します。
"""
from typing import Callable, Dict, List, Set

from retro_decompiler.core.address import Address
from retro_decompiler.core.bytecode import OperationCodeStore, Row
from retro_decompiler.core.view import DecodedView, DecompiledRow, GapMarker, ViewEntry, ViewRow

# 外部から供給されるデコード関数の型
DecodeFunction = Callable[[Row], DecompiledRow]


# @intent:responsibility ストア全体をデコードし、参照先アドレスとマージしたビューを返します。
# @intent:post-condition 出力の行アドレスは code ∪ referenced と一致し、重複なく厳密に昇順です。
#                        ビューの末尾がギャップマーカーになることはありません。
def decompile_map(store: OperationCodeStore, decode: DecodeFunction) -> DecodedView:
    """
    1. ストア順に各命令を一度だけデコードする
    2. 引数が解決する参照先アドレスを集める
    3. 両者の和集合を昇順に並べ、非連続な箇所にギャップマーカーを挟む
    """
    code: Dict[Address, DecompiledRow] = {}
    data: Set[Address] = set()
    for row in store:
        decoded = decode(row)
        code[row.address] = decoded
        if decoded.argument is not None:
            target = decoded.argument.target(row.address)
            if target is not None:
                data.add(target)

    all_addresses = set(code) | data
    ordered = sorted(all_addresses)

    entries: List[ViewEntry] = []
    for i, address in enumerate(ordered):
        decoded = code.get(address)
        if decoded is not None:
            target = decoded.argument.target(address) if decoded.argument is not None else None
            entries.append(ViewRow(address, store[address], decoded, target))
        else:
            entries.append(ViewRow(address))

        is_last = i == len(ordered) - 1
        if not is_last and (address + 1) not in all_addresses:
            entries.append(GapMarker(after=address, before=ordered[i + 1]))

    return DecodedView(tuple(entries))
