"""Tests for TamperableItem."""

from tamperline.contracts import TamperableItem


class TestTamperableItem:
    def test_get_source_property(self) -> None:
        item = TamperableItem(source={"title": "x"})

        assert item.get_source_property("title") == "x"
        assert item.get_source_property("missing") is None
        assert item.get_source_property("missing", default="d") == "d"
