"""Tests for domain/tags.py."""

import pytest

from chatmemo.domain.errors import ReservedTagConflict
from chatmemo.domain.tags import (
    RESERVED_TAG_KEYS,
    base_tags,
    build_tags,
    find_reserved_tag,
    split_trailing_tags,
)


class TestSplitTrailingTags:
    def test_no_tags(self):
        assert split_trailing_tags(["some", "message"]) == (["some", "message"], [])

    def test_trailing_tags_keep_order(self):
        words = ["deploy", "z:1", "a:2"]
        assert split_trailing_tags(words) == (["deploy"], ["z:1", "a:2"])

    def test_stops_at_first_plain_word(self):
        words = ["a:1", "deploy", "b:2"]
        assert split_trailing_tags(words) == (["a:1", "deploy"], ["b:2"])

    def test_all_tags(self):
        assert split_trailing_tags(["a:1", "b:2"]) == ([], ["a:1", "b:2"])

    def test_empty(self):
        assert split_trailing_tags([]) == ([], [])

    def test_separator_is_structural(self):
        # no key/value validation: a bare colon still counts
        assert split_trailing_tags(["x", ":", "http://host"]) == (["x"], [":", "http://host"])


class TestBuildTags:
    def test_sorted_union(self):
        assert build_tags(["memo", "author:bob"], ["env:prod", "app:api"]) == [
            "app:api",
            "author:bob",
            "env:prod",
            "memo",
        ]

    def test_keeps_duplicates(self):
        assert build_tags(["memo"], ["memo", "x:1", "x:1"]) == ["memo", "memo", "x:1", "x:1"]

    @pytest.mark.parametrize("tag", ["author:eve", "chan:general", "author:"])
    def test_reserved(self, tag):
        with pytest.raises(ReservedTagConflict):
            build_tags(["memo"], ["ok:1", tag])

    def test_reserved_in_base_is_allowed(self):
        assert build_tags(["author:bob", "chan:ops"], []) == ["author:bob", "chan:ops"]

    def test_case_sensitive(self):
        assert build_tags([], ["Author:eve"]) == ["Author:eve"]

    def test_find_reserved_tag(self):
        assert find_reserved_tag(["a:1", "chan:x"]) == "chan:x"
        assert find_reserved_tag(["a:1"]) is None
        assert RESERVED_TAG_KEYS == ("author:", "chan:")


class TestBaseTags:
    def test_full(self):
        assert base_tags("bob", "ops", "discord") == ["memo", "author:bob", "chan:ops", "source:discord"]

    def test_no_channel(self):
        tags = base_tags("bob", None, "discord")
        assert tags == ["memo", "author:bob", "source:discord"]
        assert not any(t.startswith("chan:") for t in tags)

    def test_no_marker_no_source(self):
        assert base_tags("bob", marker=None) == ["author:bob"]
