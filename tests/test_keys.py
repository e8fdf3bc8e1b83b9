"""
Tests for key normalization.
"""

from __future__ import annotations

from core.keys import normalize_key, record_filename


class TestNormalizeKey:
    """Tests for normalize_key."""

    def test_alphanumeric_key_unchanged(self) -> None:
        """Test that letters and digits pass through."""
        assert normalize_key("User42abc") == "User42abc"

    def test_unsafe_characters_replaced(self) -> None:
        """Test that every non-alphanumeric character becomes an underscore."""
        assert normalize_key("user:42/profile.v1") == "user_42_profile_v1"
        assert normalize_key("a b-c") == "a_b_c"

    def test_non_ascii_replaced_per_character(self) -> None:
        """Test that non-ASCII letters are treated as unsafe."""
        assert normalize_key("café") == "caf_"

    def test_empty_key(self) -> None:
        """Test that normalization is total."""
        assert normalize_key("") == ""

    def test_distinct_keys_can_collide(self) -> None:
        """Test the documented collision limitation."""
        assert normalize_key("a:b") == normalize_key("a/b")

    def test_record_filename_has_json_suffix(self) -> None:
        """Test record filenames."""
        assert record_filename("session:1") == "session_1.json"
