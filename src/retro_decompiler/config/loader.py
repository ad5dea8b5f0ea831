import yaml
from typing import Dict, Any, List, Optional
from retro_decompiler.core.argument import ArgumentKind, GotoIcon
from .models import SessionConfig, DecoderConfig, RuleConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> SessionConfig:
        with open(path, 'r', encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> SessionConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Session config must be a mapping, got {type(data).__name__}")

        first_address = data.get("first_address", "000")
        if not isinstance(first_address, str):
            # 010 のような値はYAMLが8進数の整数にしてしまい、元の16進テキストを復元できない
            raise ValueError(f"first_address must be a quoted hex string: {first_address!r}")

        bytecode = self._parse_bytecode(data.get("bytecode", ""))

        # Parse Decoder Table
        decoder_data = data.get("decoder", {}) or {}
        if not isinstance(decoder_data, dict):
            raise ValueError(f"decoder must be a mapping: {decoder_data!r}")
        rules = []
        for rule_data in decoder_data.get("rules", []) or []:
            if not isinstance(rule_data, dict):
                raise ValueError(f"Decoder rule must be a mapping: {rule_data!r}")
            if rule_data.get("mnemonic") is None:
                raise ValueError(f"Decoder rule is missing a mnemonic: {rule_data!r}")
            rules.append(RuleConfig(
                mask=self._parse_int(rule_data.get("mask", 0xFFFF)),
                match=self._parse_int(rule_data.get("match")),
                mnemonic=str(rule_data["mnemonic"]),
                goto=self._parse_name(rule_data.get("goto"), [g.value for g in GotoIcon], "goto"),
                argument=self._parse_name(rule_data.get("argument"), [k.value for k in ArgumentKind], "argument"),
                comment=rule_data.get("comment", ""),
            ))

        decoder = DecoderConfig(
            rules=rules,
            fallback_mnemonic=decoder_data.get("fallback", "DW"),
            absolute_mask=self._parse_int(decoder_data.get("absolute_mask", 0x0FFF)),
        )

        return SessionConfig(
            first_address=first_address,
            bytecode=bytecode,
            decoder=decoder,
        )

    def _parse_bytecode(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            lines: List[str] = []
            for item in value:
                # 0010 のような値はYAMLが8進数として解釈してしまうため、文字列のみ受け付ける
                if not isinstance(item, str):
                    raise ValueError(f"Bytecode entries must be quoted strings: {item!r}")
                lines.append(item)
            return "\n".join(lines)
        raise ValueError(f"Invalid bytecode format: {value!r}")

    def _parse_name(self, value: Any, allowed: List[str], what: str) -> Optional[str]:
        if value is None:
            return None
        name = str(value).strip().lower().replace("_", "-")
        if name not in allowed:
            raise ValueError(f"Unknown {what}: {value}")
        return name

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
