# tests/core/test_decompiler.py
"""
デコード・マージエンジン(decompile_map)の単体テスト。
"""
from retro_decompiler.core.address import Address
from retro_decompiler.core.argument import Argument, GotoIcon
from retro_decompiler.core.bytecode import OperationCodeStore
from retro_decompiler.core.decompiler import decompile_map
from retro_decompiler.core.opcode import OpCode
from retro_decompiler.core.view import DecodedView, DecompiledRow, GapMarker, ViewRow

# @intent:test_suite 命令アドレスと参照アドレスの統合、およびギャップマーカーの検証。

def plain_decoder(row):
    return DecompiledRow(mnemonic="DW")


class RecordingDecoder:
    """
    呼び出し順序と回数を記録するテスト用デコーダ。
    """
    def __init__(self, mapping=None):
        self.calls = []
        self.mapping = mapping or {}

    def __call__(self, row):
        self.calls.append(row.address)
        return self.mapping.get(row.code.value, DecompiledRow(mnemonic="DW"))


class TestDecompileMap:
    # @intent:test_case_end_to_end NOP / JMP $0x005 の2命令から3行と1つのギャップが生成されることを検証します。
    def test_end_to_end_scenario(self):
        store = OperationCodeStore.build(Address(0x000), ["0001", "0002"])
        decoder = RecordingDecoder({
            0x0001: DecompiledRow(mnemonic="NOP"),
            0x0002: DecompiledRow(mnemonic="JMP", goto=GotoIcon.STRONG, argument=Argument.absolute(0x005)),
        })

        view = decompile_map(store, decoder)

        assert view.entries == (
            ViewRow(Address(0x000), OpCode(0x0001), DecompiledRow(mnemonic="NOP"), None),
            ViewRow(Address(0x001), OpCode(0x0002),
                    DecompiledRow(mnemonic="JMP", goto=GotoIcon.STRONG, argument=Argument.absolute(0x005)),
                    Address(0x005)),
            GapMarker(after=Address(0x001), before=Address(0x005)),
            ViewRow(Address(0x005)),
        )
        data_row = view.row(0x005)
        assert not data_row.is_code
        assert data_row.value_text == "0000"
        assert data_row.mnemonic is None
        assert data_row.argument is None
        assert not view.gap_after(0x000)
        assert view.gap_after(0x001)
        assert not view.gap_after(0x005)

    def test_decoder_called_once_per_operation_in_order(self):
        store = OperationCodeStore.build(0xFFFE, ["1", "2", "3"])
        decoder = RecordingDecoder()
        decompile_map(store, decoder)
        assert decoder.calls == [Address(0xFFFE), Address(0xFFFF), Address(0x0000)]

    # @intent:test_case_gaps 0x010, 0x011, 0x014 の場合、0x011の後にのみギャップが入ります。
    def test_gap_markers(self):
        # ストアは連続しているため、0x014 は引数から参照されるだけのアドレスとして用意する
        store = OperationCodeStore.build(0x010, ["0001", "0002"])
        decoder = RecordingDecoder({0x0002: DecompiledRow("BRA", argument=Argument.offset(3))})
        view = decompile_map(store, decoder)

        assert view.addresses == [Address(0x010), Address(0x011), Address(0x014)]
        assert view.gaps == [GapMarker(Address(0x011), Address(0x014))]
        assert not view.gap_after(0x010)
        assert not view.gap_after(0x014)
        assert isinstance(view.entries[-1], ViewRow)

    def test_data_reference_below_code(self):
        store = OperationCodeStore.build(0x020, ["0001"])
        decoder = RecordingDecoder({0x0001: DecompiledRow("BNE", GotoIcon.CONDITIONAL, Argument.offset(-2))})
        view = decompile_map(store, decoder)

        assert view.addresses == [Address(0x01E), Address(0x020)]
        assert view.gaps == [GapMarker(Address(0x01E), Address(0x020))]
        assert view.row(0x020).target == Address(0x01E)

    def test_reference_into_code_is_not_duplicated(self):
        store = OperationCodeStore.build(0x000, ["0001", "0002", "0003"])
        decoder = RecordingDecoder({0x0003: DecompiledRow("LOOP", argument=Argument.offset(-2))})
        view = decompile_map(store, decoder)

        assert view.addresses == [Address(0x000), Address(0x001), Address(0x002)]
        assert view.gaps == []
        assert all(row.is_code for row in view.rows)

    def test_stack_and_const_add_no_rows(self):
        store = OperationCodeStore.build(0x000, ["0001", "0002"])
        decoder = RecordingDecoder({
            0x0001: DecompiledRow("PUSH", argument=Argument.stack(8)),
            0x0002: DecompiledRow("LDI", argument=Argument.const(-1)),
        })
        view = decompile_map(store, decoder)

        assert view.addresses == [Address(0x000), Address(0x001)]
        assert view.row(0x000).target is None
        assert view.row(0x001).target is None

    def test_wrapped_target(self):
        store = OperationCodeStore.build(0x0001, ["0001"])
        decoder = RecordingDecoder({0x0001: DecompiledRow("BRA", argument=Argument.offset(-3))})
        view = decompile_map(store, decoder)

        assert view.addresses == [Address(0x0001), Address(0xFFFE)]
        assert view.gap_after(0x0001)
        assert not view.gap_after(0xFFFE)

    # @intent:test_case_merge 出力アドレスは命令アドレスと参照アドレスの和集合と一致し、厳密に昇順です。
    def test_merge_completeness(self):
        codes = ["0001", "0002", "0003", "0004"]
        store = OperationCodeStore.build(0x100, codes)
        decoder = RecordingDecoder({
            0x0001: DecompiledRow("JMP", argument=Argument.absolute(0x050)),
            0x0002: DecompiledRow("LD", argument=Argument.pointer(0x20)),
            0x0003: DecompiledRow("LD", argument=Argument.pointer_inc(0x20)),
            0x0004: DecompiledRow("ST", argument=Argument.pointer_dec(-0x80)),
        })
        view = decompile_map(store, decoder)

        code_addresses = {Address(0x100 + i) for i in range(len(codes))}
        referenced = {Address(0x050), Address(0x121), Address(0x122), Address(0x083)}
        assert set(view.addresses) == code_addresses | referenced
        assert view.addresses == sorted(view.addresses)
        assert len(view.addresses) == len(set(view.addresses))
        assert len(view) == len(code_addresses | referenced)

    def test_empty_store_gives_empty_view(self):
        store = OperationCodeStore(0x000, [])
        view = decompile_map(store, plain_decoder)
        assert view == DecodedView()
        assert view.is_empty
        assert view.rows == []

    # @intent:test_case_idempotence 同じ入力を2回デコードすると構造的に同一のビューになります。
    def test_idempotent(self):
        store = OperationCodeStore.build(0x010, ["0001", "0002", "0003"])
        decoder = RecordingDecoder({0x0002: DecompiledRow("BRA", argument=Argument.offset(0x10))})
        first = decompile_map(store, decoder)
        second = decompile_map(store, decoder)
        assert first == second
        assert first.entries == second.entries

    def test_full_address_space_has_no_gaps(self):
        store = OperationCodeStore(0x8000, [OpCode(0)] * 0x10000)
        view = decompile_map(store, plain_decoder)
        assert len(view) == 0x10000
        assert view.gaps == []
        assert view.addresses[0] == Address(0x0000)
