# tests/core/test_address.py
"""
retro_decompiler.core.addressモジュールの単体テスト。
"""
import pytest

from retro_decompiler.core.address import Address, MAX_ADDRESS, as_address
from retro_decompiler.core.errors import FormatError

# @intent:test_suite 16bitアドレスのラップアラウンド演算と解析の検証。

class TestAddressArithmetic:
    # @intent:test_case_round_trip (a + k) - k == a が任意の整数kで成り立つことを検証します。
    @pytest.mark.parametrize("start", [0x000, 0x001, 0x7FFF, 0xFFFE, 0xFFFF])
    @pytest.mark.parametrize("k", [0, 1, -1, 2, -2, 0x80, 0xFFFF, 0x10000, -0x12345])
    def test_add_then_subtract_round_trip(self, start, k):
        a = Address(start)
        assert (a + k) - k == a

    def test_add_wraps_past_max(self):
        assert Address(MAX_ADDRESS) + 1 == Address(0x0000)
        assert Address(0xFFFE) + 3 == Address(0x0001)

    def test_subtract_wraps_below_zero(self):
        assert Address(0x0000) - 1 == Address(0xFFFF)
        assert Address(0x020) + (-2) == Address(0x01E)

    def test_difference_of_addresses_is_wrapped_distance(self):
        assert Address(0x011) - Address(0x010) == 1
        assert Address(0x0001) - Address(0xFFFF) == 2

    def test_construction_normalizes(self):
        assert Address(0x10010) == Address(0x0010)
        assert Address(-1) == Address(0xFFFF)
        assert hash(Address(0x10010)) == hash(Address(0x0010))

    def test_equal_to_plain_int(self):
        assert Address(0x010) == 0x010
        assert Address(0x10010) == 0x0010
        assert Address(0x010) != 0x011
        assert {Address(0x020): "a"}[0x020] == "a"

    def test_ordering_is_numeric(self):
        addresses = [Address(0x100), Address(0x002), Address(0xFFFF), Address(0x010)]
        assert sorted(addresses) == [Address(0x002), Address(0x010), Address(0x100), Address(0xFFFF)]
        assert Address(0x00F) < Address(0x010)

    def test_immutable(self):
        a = Address(0x10)
        with pytest.raises(AttributeError):
            a.value = 0x20


class TestAddressText:
    @pytest.mark.parametrize("text, expected", [
        ("0", 0x0),
        ("10", 0x10),
        ("00ff", 0xFF),
        ("FFFF", 0xFFFF),
        ("  aBc \t", 0xABC),
    ])
    def test_parse_valid(self, text, expected):
        assert Address.parse(text) == Address(expected)

    # @intent:test_case_invalid 16進でない、符号付き、接頭辞付き、または16bitを超える値を拒否します。
    @pytest.mark.parametrize("text", ["", "   ", "xyz", "-1", "+1", "0x10", "10000", "12 34"])
    def test_parse_invalid(self, text):
        with pytest.raises(FormatError):
            Address.parse(text)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            Address.parse("zz")

    def test_display_is_lowercase_padded_to_three_digits(self):
        assert str(Address(0x5)) == "005"
        assert str(Address(0xABCD)) == "abcd"
        assert Address(0x5).to_hex() == "5"
        assert f"{Address(0x1F):04x}" == "001f"

    def test_parse_and_format_round_trip(self):
        assert str(Address.parse("01e")) == "01e"
        assert Address.parse(Address(0x1234).to_hex()) == Address(0x1234)

    def test_as_address(self):
        a = Address(0x10)
        assert as_address(a) is a
        assert as_address(0x10) == a
