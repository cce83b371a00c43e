"""Tests for preview sorting, truncation, placement and rendering."""

import pytest

from taggerlink.constants import NO_TAGS_MESSAGE
from taggerlink.models.preview import Alignment
from taggerlink.models.tagger import Bucket, ClassifiedEntry, ClassifiedTags, Orientation
from taggerlink.services.presenter import (
    assemble,
    horizontal_alignment,
    present,
    render_preview_html,
    render_preview_text,
    sort_entries,
    vertical_offset,
)


def _tag(name: str) -> ClassifiedEntry:
    return ClassifiedEntry(name=name, symbol="illustration", is_tag=True, type="ILLUSTRATION_TAG")


def _relationship(name: str, orientation: Orientation = Orientation.NONE) -> ClassifiedEntry:
    return ClassifiedEntry(
        name=name, symbol="depicts", is_tag=False, orientation=orientation, type="DEPICTS"
    )


class TestSortEntries:
    def test_relationships_before_tags(self) -> None:
        entries = [_tag("a"), _relationship("z"), _tag("b"), _relationship("y")]

        ordered = sort_entries(entries)

        assert [e.name for e in ordered] == ["y", "z", "a", "b"]

    def test_names_compare_case_sensitively(self) -> None:
        """Code point order: uppercase sorts before lowercase."""
        ordered = sort_entries([_tag("apple"), _tag("Zebra"), _tag("banana")])

        assert [e.name for e in ordered] == ["Zebra", "apple", "banana"]

    def test_sort_is_stable(self) -> None:
        first = _relationship("same", Orientation.FLIPPED)
        second = _relationship("same", Orientation.REVERSED)

        ordered = sort_entries([first, second])

        assert ordered[0] is first
        assert ordered[1] is second


class TestPresent:
    def test_exactly_max_visible_has_no_overflow(self) -> None:
        entries = [_tag(f"tag {i}") for i in range(8)]

        menu = present(entries, Bucket.ART)

        assert len(menu.entries) == 8
        assert menu.overflow_label is None

    def test_nine_entries_show_eight_and_overflow_label(self) -> None:
        """Overflow counts one more than the entries hidden."""
        entries = [_tag(f"tag {i}") for i in range(9)]

        menu = present(entries, Bucket.ART)

        assert len(menu.entries) == 8
        assert menu.overflow_label == "+ 2 more"

    def test_overflow_label_for_larger_bucket(self) -> None:
        entries = [_tag(f"tag {i:02d}") for i in range(20)]

        menu = present(entries, Bucket.ORACLE)

        assert len(menu.entries) == 8
        assert menu.overflow_label == "+ 13 more"

    def test_custom_max_visible(self) -> None:
        entries = [_tag(c) for c in "abcde"]

        menu = present(entries, Bucket.ART, max_visible=3)

        assert [e.name for e in menu.entries] == ["a", "b", "c"]
        assert menu.overflow_label == "+ 3 more"

    def test_visible_entries_are_sorted(self) -> None:
        entries = [_tag("b"), _relationship("c"), _tag("a")]

        menu = present(entries, Bucket.ART)

        assert [e.name for e in menu.entries] == ["c", "a", "b"]

    def test_rejects_non_positive_max_visible(self) -> None:
        with pytest.raises(ValueError, match="max_visible"):
            present([_tag("a")], Bucket.ART, max_visible=0)


class TestAssemble:
    def test_no_entries_signals_no_content(self) -> None:
        assert assemble(ClassifiedTags()) is None

    def test_only_non_empty_buckets_get_menus(self) -> None:
        summary = assemble(ClassifiedTags(oracle=[_tag("a")]))

        assert summary is not None
        assert [menu.bucket for menu in summary.menus] == [Bucket.ORACLE]

    def test_art_menu_comes_first(self) -> None:
        summary = assemble(ClassifiedTags(art=[_tag("a")], oracle=[_tag("b")]))

        assert summary is not None
        assert [menu.bucket for menu in summary.menus] == [Bucket.ART, Bucket.ORACLE]


class TestPlacement:
    @pytest.mark.parametrize(
        ("pointer_x", "page_width", "expected"),
        [
            (100, 1000, Alignment.RIGHT),
            (550, 1000, Alignment.RIGHT),
            (551, 1000, Alignment.LEFT),
            (999, 1000, Alignment.LEFT),
            (10, 0, Alignment.RIGHT),
        ],
    )
    def test_horizontal_alignment(
        self, pointer_x: float, page_width: float, expected: Alignment
    ) -> None:
        assert horizontal_alignment(pointer_x, page_width) is expected

    def test_vertical_offset(self) -> None:
        assert vertical_offset(300) == -80
        assert vertical_offset(100) == -26
        assert vertical_offset(0) == 0


class TestRender:
    def test_placeholder_when_no_content(self) -> None:
        html = render_preview_html(None)

        assert NO_TAGS_MESSAGE in html
        assert "<ul" not in html

    def test_renders_menus_with_orientation_classes(self) -> None:
        summary = assemble(
            ClassifiedTags(
                art=[_tag("Dragon"), _relationship("Goblin", Orientation.FLIPPED)],
                oracle=[_relationship("Bolt", Orientation.REVERSED)],
            )
        )

        html = render_preview_html(summary)

        assert html.count("<ul") == 2
        assert '<li class="icon-upside-down">' in html
        assert '<li class="icon-flipped">' in html
        assert "Dragon</li>" in html

    def test_renders_overflow_label_last(self) -> None:
        summary = assemble(ClassifiedTags(art=[_tag(f"t{i}") for i in range(9)]))

        html = render_preview_html(summary)

        assert html.count("<li") == 9
        assert html.endswith("<li>+ 2 more</li></ul></div>")

    def test_escapes_names(self) -> None:
        summary = assemble(ClassifiedTags(art=[_tag("<script>")]))

        html = render_preview_html(summary)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_text_rendering(self) -> None:
        summary = assemble(ClassifiedTags(oracle=[_tag("Burn")]))

        assert render_preview_text(summary) == "[oracle]\n  (illustration) Burn"
        assert render_preview_text(None) == NO_TAGS_MESSAGE
