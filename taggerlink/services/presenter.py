"""
Preview presentation.

Sorts and truncates classified buckets into menus, computes where the
preview opens, and renders the HTML fragment shown on hover.
"""

import math
from collections.abc import Iterable
from html import escape

from taggerlink.constants import (
    LEFT_ALIGN_THRESHOLD,
    MAX_VISIBLE_ENTRIES,
    NO_TAGS_MESSAGE,
    VERTICAL_OFFSET_DIVISOR,
)
from taggerlink.models.preview import Alignment, PreviewSummary, TagMenu
from taggerlink.models.tagger import Bucket, ClassifiedEntry, ClassifiedTags


def sort_entries(entries: Iterable[ClassifiedEntry]) -> list[ClassifiedEntry]:
    """Relationships before tags, then by name (code point order). Stable."""
    return sorted(entries, key=lambda entry: (entry.is_tag, entry.name))


def present(
    entries: Iterable[ClassifiedEntry],
    bucket: Bucket,
    max_visible: int = MAX_VISIBLE_ENTRIES,
) -> TagMenu:
    """
    Build the menu for one bucket.

    The first max_visible sorted entries are shown. When there are more,
    the overflow label reads "+ {total - (max_visible - 1)} more", which
    counts one more than the entries actually hidden. The count is kept as
    shown on the live site.

    Raises:
        ValueError: If max_visible is less than 1
    """
    if max_visible < 1:
        raise ValueError(f"max_visible must be at least 1, got {max_visible}")

    ordered = sort_entries(entries)
    total = len(ordered)

    if total <= max_visible:
        return TagMenu(bucket=bucket, entries=ordered)

    return TagMenu(
        bucket=bucket,
        entries=ordered[:max_visible],
        overflow_label=f"+ {total - (max_visible - 1)} more",
    )


def assemble(
    tags: ClassifiedTags, max_visible: int = MAX_VISIBLE_ENTRIES
) -> PreviewSummary | None:
    """
    Build menus for every non-empty bucket.

    Returns:
        PreviewSummary, or None when neither bucket has entries so the
        caller can show a single placeholder.
    """
    menus = [
        present(tags.bucket(bucket), bucket, max_visible)
        for bucket in (Bucket.ART, Bucket.ORACLE)
        if tags.bucket(bucket)
    ]

    if not menus:
        return None

    return PreviewSummary(menus=menus)


def horizontal_alignment(pointer_x: float, page_width: float) -> Alignment:
    """Open to the left once the pointer is past 55% of the page."""
    if page_width <= 0:
        return Alignment.RIGHT
    if pointer_x / page_width > LEFT_ALIGN_THRESHOLD:
        return Alignment.LEFT
    return Alignment.RIGHT


def vertical_offset(rendered_height: float) -> int:
    """Top offset in pixels, applied after the content has been rendered."""
    return -math.floor(rendered_height / VERTICAL_OFFSET_DIVISOR)


def _render_entry(entry: ClassifiedEntry) -> str:
    css = f' class="{entry.css_class}"' if entry.css_class else ""
    symbol = f'<span class="symbol symbol-{entry.symbol}"></span> ' if entry.symbol else ""
    return f"<li{css}>{symbol}{escape(entry.name)}</li>"


def render_preview_html(summary: PreviewSummary | None) -> str:
    """
    Render the preview menu container.

    One <ul> per menu; the overflow label is the last <li>. An empty preview
    renders the placeholder message instead.
    """
    if summary is None:
        return f'<div class="menu-container">{escape(NO_TAGS_MESSAGE)}</div>'

    parts = ['<div class="menu-container">']
    for menu in summary.menus:
        parts.append(f'<ul class="tag-menu tag-menu-{menu.bucket.value}">')
        parts.extend(_render_entry(entry) for entry in menu.entries)
        if menu.overflow_label:
            parts.append(f"<li>{escape(menu.overflow_label)}</li>")
        parts.append("</ul>")
    parts.append("</div>")

    return "".join(parts)


def render_preview_text(summary: PreviewSummary | None) -> str:
    """Plain-text rendering for terminals and logs."""
    if summary is None:
        return NO_TAGS_MESSAGE

    lines: list[str] = []
    for menu in summary.menus:
        lines.append(f"[{menu.bucket.value}]")
        for entry in menu.entries:
            symbol = f"({entry.symbol}) " if entry.symbol else ""
            lines.append(f"  {symbol}{entry.name}")
        if menu.overflow_label:
            lines.append(f"  {menu.overflow_label}")

    return "\n".join(lines)
