"""
Tests for composite key encoding.
"""

import pytest

from opstore.data.keys import KEY_DELIMITER, decode_key, encode_key, is_descendant


class TestEncodeKey:
    """Tests for encode_key."""

    def test_segments_are_terminated(self):
        assert encode_key(["cookies", "abc"]) == "cookies:abc:"

    def test_empty_sequence(self):
        assert encode_key([]) == ""

    def test_integers_are_zero_padded(self):
        assert encode_key(["logs", 42]) == "logs:0000000000000042:"

    def test_integer_order_matches_string_order(self):
        timestamps = [9, 10, 1700000000000, 99]
        keys = [encode_key(["logs", ts]) for ts in timestamps]
        assert sorted(keys) == [encode_key(["logs", ts]) for ts in sorted(timestamps)]

    def test_delimiter_in_segment_rejected(self):
        with pytest.raises(ValueError):
            encode_key(["cookies", f"a{KEY_DELIMITER}b"])

    def test_negative_integer_rejected(self):
        with pytest.raises(ValueError):
            encode_key(["logs", -1])

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            encode_key(["flags", True])

    def test_unsupported_type_rejected(self):
        with pytest.raises(ValueError):
            encode_key(["logs", 1.5])


class TestPrefixSemantics:
    """A shorter key is a prefix only of its true descendants."""

    def test_sibling_id_is_not_descendant(self):
        child_of_10 = encode_key(["cookies", "10", "x"])
        assert not is_descendant(child_of_10, ["cookies", "1"])
        assert is_descendant(child_of_10, ["cookies", "10"])

    def test_collection_names_sharing_a_prefix(self):
        assert not is_descendant(encode_key(["logsarchive", "a"]), ["logs"])

    def test_decode_round_trip(self):
        assert decode_key(encode_key(["settings", "system"])) == ["settings", "system"]

    def test_decode_malformed(self):
        with pytest.raises(ValueError):
            decode_key("cookies:abc")
