"""
Tests for identifier encoding.
"""
import pytest

from surl.services.allocator import COUNTER_KEY
from surl.services.encoder import ALPHABET, ID_PREFIX, MAX_COUNTER, encode, is_identifier


class TestEncode:
    """Test radix-62 identifier encoding"""

    def test_zero_is_prefix_and_first_symbol(self):
        """Counter 0 encodes to the prefix plus the alphabet's first symbol"""
        assert encode(0) == "/0"
        assert encode(0) == ID_PREFIX + ALPHABET[0]

    def test_single_symbol_range(self):
        """Values below 62 use exactly one symbol"""
        assert encode(9) == "/9"
        assert encode(10) == "/a"
        assert encode(36) == "/A"
        assert encode(61) == "/Z"

    def test_least_significant_symbol_first(self):
        """Symbols are emitted least significant first"""
        assert encode(62) == "/01"
        assert encode(63) == "/11"
        # 2 * 62 + 1 -> digits (1, 2)
        assert encode(125) == "/12"
        assert encode(62 * 62) == "/001"

    def test_carry_changes_length(self):
        """The 62nd and 63rd values (counters 61 and 62) differ in length"""
        assert len(encode(61)) == 2
        assert len(encode(62)) == 3

    def test_deterministic(self):
        """Same counter always gives the same identifier"""
        assert encode(123456789) == encode(123456789)

    def test_injective_over_range(self):
        """Distinct counters never share an identifier"""
        codes = {encode(n) for n in range(20000)}
        assert len(codes) == 20000

    def test_injective_near_upper_bound(self):
        """Distinct counters near the top of the u64 range stay distinct"""
        counters = range(MAX_COUNTER - 500, MAX_COUNTER + 1)
        codes = {encode(n) for n in counters}
        assert len(codes) == len(counters)

    def test_max_counter(self):
        """The largest u64 encodes without error (11 radix-62 digits)"""
        code = encode(MAX_COUNTER)
        assert code.startswith(ID_PREFIX)
        assert len(code) == 12
        assert is_identifier(code)

    @pytest.mark.parametrize("counter", [-1, MAX_COUNTER + 1])
    def test_out_of_range(self, counter):
        """Values outside the u64 domain are rejected"""
        with pytest.raises(ValueError):
            encode(counter)


class TestIsIdentifier:
    """Test identifier shape detection"""

    def test_generated_ids_match(self):
        for n in (0, 61, 62, 3844, 10 ** 12):
            assert is_identifier(encode(n))

    @pytest.mark.parametrize("key", ["", "/", "0", "abc", "/a/b", "/a-b", "/__count__", "__count__"])
    def test_other_keys_do_not_match(self, key):
        assert not is_identifier(key)

    def test_counter_key_is_not_an_identifier(self):
        """The reserved metadata key can never be produced by encode()"""
        assert not is_identifier(COUNTER_KEY.decode("utf-8"))
