"""
Unit Tests for the crypt() base64 encoding
==========================================
"""

import pytest


class TestEncode64:
    """Tests for encode64 and char_index."""

    def test_full_group_of_zero_bytes(self):
        from passhash_core.encoding import encode64

        assert encode64(b"\x00\x00\x00", 3) == "...."

    def test_full_group_of_ones(self):
        from passhash_core.encoding import encode64

        assert encode64(b"\xff\xff\xff", 3) == "zzzz"

    def test_little_endian_packing(self):
        from passhash_core.encoding import encode64

        # 0x01 lands in the first symbol, not the last
        assert encode64(b"\x01\x00\x00", 3) == "/..."

    def test_partial_group_emits_extra_symbol(self):
        from passhash_core.encoding import encode64

        assert encode64(b"\x01", 1) == "/."
        assert len(encode64(b"\x01\x02", 2)) == 3

    @pytest.mark.parametrize("count,expected", [(6, 8), (16, 22), (64, 86)])
    def test_output_lengths(self, count, expected):
        from passhash_core.encoding import encode64

        assert len(encode64(bytes(range(count)), count)) == expected

    def test_only_count_bytes_are_encoded(self):
        from passhash_core.encoding import encode64

        assert encode64(b"\x00\x00\x00\xff\xff\xff", 3) == "...."

    def test_char_index(self):
        from passhash_core.encoding import ITOA64, char_index

        assert len(ITOA64) == 64
        assert char_index(".") == 0
        assert char_index("5") == 7
        assert char_index("z") == 63
        assert char_index("$") == -1
        assert char_index("") == -1
