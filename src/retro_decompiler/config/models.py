from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class RuleConfig:
    mask: int
    match: int
    mnemonic: str
    goto: Optional[str] = None      # "conditional", "strong"
    argument: Optional[str] = None  # "absolute", "offset", "pointer", ...
    comment: str = ""

@dataclass
class DecoderConfig:
    rules: List[RuleConfig] = field(default_factory=list)
    fallback_mnemonic: str = "DW"
    absolute_mask: int = 0x0FFF

@dataclass
class SessionConfig:
    # アドレスとバイトコードは入力テキストのまま保持し、検証はセッション層で行う
    first_address: str = "000"
    bytecode: str = ""
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
