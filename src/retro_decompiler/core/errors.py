# retro_decompiler/core/errors.py
"""
コア層の例外定義。

入力テキスト（アドレス、オペレーションコード）の解析失敗と、
アドレス空間を超える命令数を表す型付きの例外を提供します。
コア自身はこれらを送出するだけで、ユーザーへの提示はセッション層の責務です。
"""
from typing import Any, List, NamedTuple, Optional, Sequence


# @intent:data_structure 解析に失敗した入力行の位置情報。
class ParseFailure(NamedTuple):
    number: int     # 入力テキスト上の行番号 (1始まり、空行を含む)
    position: int   # 空行を除いた命令列でのインデックス
    address: Any    # その命令が置かれるはずだったAddress
    text: str


# @intent:responsibility コア層の全ての例外の基底クラス。
class DecompilerError(ValueError):
    pass


# @intent:responsibility 16進テキストが期待する幅の値として解釈できないことを表します。
class FormatError(DecompilerError):
    """
    アドレスまたはオペレーションコードの書式エラー。
    複数行の入力を解析した場合、失敗した全ての行が failures に格納されます。
    """
    def __init__(self, message: str, text: Optional[str] = None, failures: Sequence[ParseFailure] = ()):
        super().__init__(message)
        self.text = text
        self.failures: List[ParseFailure] = list(failures)


# @intent:responsibility 命令数がアドレス幅で表現できる数を超えたことを表します。
class CapacityError(DecompilerError):
    def __init__(self, count: int, capacity: int):
        super().__init__(f"Too many operations: {count} (capacity {capacity})")
        self.count = count
        self.capacity = capacity
