# retro_decompiler/session/page.py
"""
デコードセッション。

入力テキスト（先頭アドレスとオペレーションコード列）を検証してストアを構築し、
問題があれば診断出力に報告します。検証を通過したセッションだけが
デコード・マージエンジンを呼び出せます。
"""
from typing import Iterable, List, Optional, Union

from retro_decompiler.core.address import MAX_ADDRESS, Address, as_address
from retro_decompiler.core.bytecode import OperationCodeStore, SourceLine, prepare_lines
from retro_decompiler.core.decompiler import DecodeFunction, decompile_map
from retro_decompiler.core.errors import CapacityError, FormatError
from retro_decompiler.core.view import DecodedView
from retro_decompiler.diagnostics.output import Output


# @intent:responsibility 1回分のデコード要求に必要なストア・出力・ビューを所有します。
class DecompilerSession:
    """
    DecompilerSession.open() で生成します。コンストラクタは検証済みの値を受け取ります。
    """
    def __init__(self, store: OperationCodeStore, output: Output, source_lines: List[SourceLine]):
        self.store = store
        self.output = output
        self._source_lines = source_lines
        self.view: Optional[DecodedView] = None

    # @intent:responsibility 入力を検証してセッションを生成します。失敗時はNoneを返し、理由をoutputに報告します。
    @classmethod
    def open(cls, first_address_text: str, bytecode: Union[str, Iterable[str]], output: Output) -> Optional["DecompilerSession"]:
        try:
            first_address = Address.parse(first_address_text)
        except FormatError:
            output.error("Invalid format of address", location_text="address")
            return None

        if not isinstance(bytecode, str):
            bytecode = list(bytecode)
        lines = prepare_lines(bytecode)
        if not lines:
            output.error("No operations passed")
            return None

        try:
            store = OperationCodeStore.build(first_address, bytecode)
        except CapacityError:
            output.error(f"Too many operations (max {MAX_ADDRESS:x})")
            return None
        except FormatError as e:
            for failure in e.failures:
                output.error("Invalid format of operation code", location=failure.address)
            return None

        output.ok("Parsed successful")
        return cls(store, output, lines)

    # @intent:responsibility デコード・マージを実行し、直前のビューを置き換えます。
    def decompile(self, decode: DecodeFunction) -> DecodedView:
        view = decompile_map(self.store, decode)
        self.view = view

        data_only = sum(1 for row in view.rows if not row.is_code)
        self.output.info(f"Decompiled {len(self.store)} operations, {data_only} data-only references")
        return view

    # @intent:responsibility 格納済みアドレスに対応する入力行を返します。
    def source_line(self, address: Union[int, Address]) -> Optional[SourceLine]:
        address = as_address(address)
        if address not in self.store:
            return None
        return self._source_lines[address - self.store.first_address]
