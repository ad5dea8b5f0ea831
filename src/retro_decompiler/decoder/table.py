# src/retro_decompiler/decoder/table.py
"""
ルールテーブル方式のデコーダ。

特定の命令セットは定義せず、(mask, match) の組で命令語を分類して
ニーモニック・ジャンプ種別・引数モードを割り当てます。
ルールはセッション設定(YAML)から与えられます。
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from retro_decompiler.core.argument import Argument, ArgumentKind, GotoIcon
from retro_decompiler.core.bytecode import Row
from retro_decompiler.core.hexfmt import to_signed_byte
from retro_decompiler.core.view import DecompiledRow
from retro_decompiler.config.models import DecoderConfig


# @intent:data_structure 1つのデコードルール。(code & mask) == match のとき適用されます。
@dataclass(frozen=True)
class DecoderRule:
    mask: int
    match: int
    mnemonic: str
    goto: Optional[GotoIcon] = None
    argument_kind: Optional[ArgumentKind] = None
    comment: str = ""

    def __post_init__(self):
        if not (0 <= self.mask <= 0xFFFF and 0 <= self.match <= 0xFFFF):
            raise ValueError(f"Rule '{self.mnemonic}': mask and match must be 16-bit values.")
        if self.match & ~self.mask & 0xFFFF:
            raise ValueError(
                f"Rule '{self.mnemonic}': match {self.match:04x} has bits outside of mask {self.mask:04x}."
            )

    def matches(self, code: int) -> bool:
        return (code & self.mask) == self.match


# @intent:responsibility 行(アドレス, コード)をルールテーブルに従ってDecompiledRowに変換します。
class TableDecoder:
    """
    デコード関数として呼び出し可能です: decoder(row) -> DecompiledRow
    どのルールにも一致しない命令はフォールバックのニーモニックで表示します。
    """
    def __init__(self, rules: Sequence[DecoderRule] = (), fallback_mnemonic: str = "DW", absolute_mask: int = 0x0FFF):
        self._rules: List[DecoderRule] = list(rules)
        self._fallback_mnemonic = fallback_mnemonic
        self._absolute_mask = absolute_mask & 0xFFFF

    @classmethod
    def from_config(cls, config: DecoderConfig) -> "TableDecoder":
        rules = []
        for rule in config.rules:
            rules.append(DecoderRule(
                mask=rule.mask,
                match=rule.match,
                mnemonic=rule.mnemonic,
                goto=GotoIcon(rule.goto) if rule.goto else None,
                argument_kind=ArgumentKind(rule.argument) if rule.argument else None,
                comment=rule.comment,
            ))
        return cls(rules, config.fallback_mnemonic, config.absolute_mask)

    @property
    def rules(self) -> List[DecoderRule]:
        return list(self._rules)

    def __call__(self, row: Row) -> DecompiledRow:
        return self.decode(row)

    def decode(self, row: Row) -> DecompiledRow:
        code = row.code.value
        for rule in self._rules:
            if rule.matches(code):
                argument = self._build_argument(rule.argument_kind, code) if rule.argument_kind else None
                return DecompiledRow(rule.mnemonic, rule.goto, argument, rule.comment)
        return DecompiledRow(self._fallback_mnemonic)

    # @intent:utility_function 命令語からモードに応じたペイロードを取り出します。
    def _build_argument(self, kind: ArgumentKind, code: int) -> Argument:
        if kind is ArgumentKind.ABSOLUTE:
            return Argument(kind, code & self._absolute_mask)
        return Argument(kind, to_signed_byte(code))
