"""
Tag preview endpoints.

Looks up a card printing through the tagger channel and returns the
preview either as JSON or as the HTML fragment shown on hover.
"""

import logging

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from taggerlink.bridge.errors import TaggerBridgeError, TaggerTimeoutError
from taggerlink.bridge.requests import request_tags
from taggerlink.config import settings
from taggerlink.constants import NO_TAGS_MESSAGE
from taggerlink.models.preview import PreviewSummary
from taggerlink.models.tagger import LookupKey
from taggerlink.services.card_links import tagger_card_url
from taggerlink.services.classifier import MALFORMED_PAYLOAD_ERRORS
from taggerlink.services.presenter import assemble, render_preview_html

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tags", tags=["tags"])


class EntryResponse(BaseModel):
    name: str
    symbol: str
    is_tag: bool
    orientation: str
    type: str


class MenuResponse(BaseModel):
    bucket: str
    entries: list[EntryResponse] = Field(default_factory=list)
    overflow_label: str | None = None


class TagPreviewResponse(BaseModel):
    """Response model for a card's tag preview."""

    set_code: str
    number: str
    tagger_url: str
    menus: list[MenuResponse] = Field(default_factory=list)
    placeholder: str | None = Field(
        default=None,
        description="Message to show instead of menus when the card has no tags",
    )


async def _load_summary(key: LookupKey, max_visible: int) -> PreviewSummary | None:
    """Look up and assemble a preview. A malformed payload yields the placeholder."""
    try:
        tags = await request_tags(key)
        return assemble(tags, max_visible)
    except TaggerTimeoutError as e:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e)) from e
    except TaggerBridgeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    except MALFORMED_PAYLOAD_ERRORS as e:
        logger.warning(
            "Malformed tagger payload for %s/%s: %r", key.set_code, key.number, e
        )
        return None


def _to_response(key: LookupKey, summary: PreviewSummary | None) -> TagPreviewResponse:
    response = TagPreviewResponse(
        set_code=key.set_code,
        number=key.number,
        tagger_url=tagger_card_url(key, settings.tagger_origin),
    )

    if summary is None:
        response.placeholder = NO_TAGS_MESSAGE
        return response

    response.menus = [
        MenuResponse(
            bucket=menu.bucket.value,
            entries=[
                EntryResponse(
                    name=entry.name,
                    symbol=entry.symbol,
                    is_tag=entry.is_tag,
                    orientation=entry.orientation.value,
                    type=entry.type,
                )
                for entry in menu.entries
            ],
            overflow_label=menu.overflow_label,
        )
        for menu in summary.menus
    ]
    return response


@router.get("/{set_code}/{number}", response_model=TagPreviewResponse)
async def get_tag_preview(
    set_code: str,
    number: str,
    max_visible: int = Query(default=settings.preview_max_visible, ge=1, le=50),
) -> TagPreviewResponse:
    """
    Get the tag preview for a card printing.

    Returns 503 if the tagger channel or lookup failed, 504 if the tagger
    did not answer in time.
    """
    key = LookupKey(set_code=set_code, number=number)
    summary = await _load_summary(key, max_visible)
    return _to_response(key, summary)


@router.get("/{set_code}/{number}/preview", response_class=HTMLResponse)
async def get_tag_preview_html(
    set_code: str,
    number: str,
    max_visible: int = Query(default=settings.preview_max_visible, ge=1, le=50),
) -> HTMLResponse:
    """Get the rendered preview fragment for a card printing."""
    key = LookupKey(set_code=set_code, number=number)
    summary = await _load_summary(key, max_visible)
    return HTMLResponse(render_preview_html(summary))
