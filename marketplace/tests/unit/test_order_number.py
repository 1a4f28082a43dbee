import pytest
from django.test import override_settings

from marketplace.ordering.domain.services.order_number import (
    BASE36_ALPHABET,
    SUFFIX_LENGTH,
    generate_order_number,
    to_base36,
)


@pytest.mark.unit
class TestOrderNumberUnit:
    def test_to_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"
        assert to_base36(1295) == "ZZ"

    def test_to_base36_rejects_negative(self):
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_generate_with_fixed_inputs(self):
        assert generate_order_number(prefix="NLR", now_ms=36, choice=lambda alphabet: "A") == "NLR10AAAA"

    @override_settings(ORDER_NUMBER_PREFIX="TST")
    def test_prefix_defaults_to_setting(self):
        number = generate_order_number(now_ms=0, choice=lambda alphabet: "7")
        assert number == "TST07777"

    def test_random_suffix_shape(self):
        number = generate_order_number(prefix="NLR", now_ms=1700000000000)
        timestamp = to_base36(1700000000000)

        assert number.startswith("NLR" + timestamp)
        suffix = number[len("NLR" + timestamp):]
        assert len(suffix) == SUFFIX_LENGTH
        assert all(char in BASE36_ALPHABET for char in suffix)
