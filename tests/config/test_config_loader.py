# tests/config/test_config_loader.py
"""
retro_decompiler.config.loaderモジュールの単体テスト。
"""
import pytest

from retro_decompiler.config.loader import ConfigLoader
from retro_decompiler.config.models import DecoderConfig, RuleConfig, SessionConfig

SESSION_YAML = """
first_address: "010"
bytecode: |
  0001
  1005

  8102
decoder:
  fallback: "???"
  absolute_mask: 0x0FFF
  rules:
    - mask: 0xFFFF
      match: 0x0001
      mnemonic: NOP
    - mask: 0xF000
      match: 0x1000
      mnemonic: JMP
      goto: strong
      argument: absolute
      comment: "jump"
    - mask: "0xFF00"
      match: "0x8100"
      mnemonic: BNE
      goto: conditional
      argument: pointer_inc
"""


class TestConfigLoader:
    @pytest.fixture
    def write_config(self, tmp_path):
        def _write(content):
            path = tmp_path / "session.yaml"
            path.write_text(content, encoding="utf-8")
            return str(path)
        return _write

    def test_load_session(self, write_config):
        config = ConfigLoader().load_from_file(write_config(SESSION_YAML))

        assert config.first_address == "010"
        assert config.bytecode == "0001\n1005\n\n8102\n"
        assert config.decoder.fallback_mnemonic == "???"
        assert config.decoder.absolute_mask == 0x0FFF
        assert config.decoder.rules == [
            RuleConfig(mask=0xFFFF, match=0x0001, mnemonic="NOP"),
            RuleConfig(mask=0xF000, match=0x1000, mnemonic="JMP", goto="strong", argument="absolute", comment="jump"),
            RuleConfig(mask=0xFF00, match=0x8100, mnemonic="BNE", goto="conditional", argument="pointer-inc"),
        ]

    def test_empty_file_gives_defaults(self, write_config):
        config = ConfigLoader().load_from_file(write_config(""))
        assert config == SessionConfig()
        assert config.decoder == DecoderConfig()

    def test_bytecode_as_list_of_strings(self, write_config):
        config = ConfigLoader().load_from_file(write_config('bytecode: ["00AB", "00cd"]\n'))
        assert config.bytecode == "00AB\n00cd"

    # @intent:test_case_octal 引用符なしの数値はYAMLで8進数等に化けるため拒否します。
    def test_unquoted_bytecode_entries_rejected(self, write_config):
        with pytest.raises(ValueError, match="quoted"):
            ConfigLoader().load_from_file(write_config("bytecode:\n  - 0010\n"))

    def test_unquoted_first_address_rejected(self, write_config):
        with pytest.raises(ValueError, match="first_address"):
            ConfigLoader().load_from_file(write_config("first_address: 010\n"))

    def test_unknown_argument_kind(self, write_config):
        content = "decoder:\n  rules:\n    - {mask: 0xFF00, match: 0x0100, mnemonic: X, argument: indirect}\n"
        with pytest.raises(ValueError, match="Unknown argument"):
            ConfigLoader().load_from_file(write_config(content))

    def test_unknown_goto(self, write_config):
        content = "decoder:\n  rules:\n    - {mask: 0xFF00, match: 0x0100, mnemonic: X, goto: maybe}\n"
        with pytest.raises(ValueError, match="Unknown goto"):
            ConfigLoader().load_from_file(write_config(content))

    def test_parse_int(self):
        loader = ConfigLoader()
        assert loader._parse_int(16) == 16
        assert loader._parse_int("0x10") == 16
        assert loader._parse_int("10") == 10
        with pytest.raises(ValueError):
            loader._parse_int(None)

    def test_malformed_yaml_reported_as_value_error(self, write_config):
        with pytest.raises(ValueError, match="Invalid YAML"):
            ConfigLoader().load_from_file(write_config("bytecode: [unclosed\n"))

    def test_rule_without_mnemonic(self, write_config):
        content = "decoder:\n  rules:\n    - {mask: 0xFF00, match: 0x0100}\n"
        with pytest.raises(ValueError, match="mnemonic"):
            ConfigLoader().load_from_file(write_config(content))

    def test_rule_must_be_mapping(self, write_config):
        content = "decoder:\n  rules:\n    - NOP\n"
        with pytest.raises(ValueError, match="mapping"):
            ConfigLoader().load_from_file(write_config(content))

    def test_document_must_be_mapping(self, write_config):
        with pytest.raises(ValueError, match="mapping"):
            ConfigLoader().load_from_file(write_config("- 0001\n- 0002\n"))
