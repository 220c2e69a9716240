"""
Unit tests for dot-path resolution.
"""

from rules_engine.paths import resolve, split_path


class TestResolve:
    """Test cases for resolve."""

    def test_top_level_key(self):
        assert resolve({"status": "active"}, "status") == ("active", True)

    def test_nested_key(self):
        record = {"user": {"profile": {"role": "admin"}}}

        assert resolve(record, "user.profile.role") == ("admin", True)

    def test_nested_mapping_value(self):
        record = {"user": {"role": "admin"}}

        assert resolve(record, "user") == ({"role": "admin"}, True)

    def test_missing_key(self):
        assert resolve({"user": {"role": "admin"}}, "user.email") == (None, False)

    def test_missing_intermediate(self):
        assert resolve({}, "missing.field") == (None, False)

    def test_non_mapping_intermediate(self):
        """Descending into a scalar fails instead of matching partially."""
        assert resolve({"user": "bob"}, "user.role") == (None, False)

    def test_no_list_indexing(self):
        assert resolve({"items": ["a", "b"]}, "items.0") == (None, False)

    def test_none_record(self):
        assert resolve(None, "status") == (None, False)

    def test_present_none_value_is_found(self):
        assert resolve({"deleted_at": None}, "deleted_at") == (None, True)

    def test_split_path(self):
        assert split_path("a.b.c") == ["a", "b", "c"]
        assert split_path("status") == ["status"]
