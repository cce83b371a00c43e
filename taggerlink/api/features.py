"""
Feature settings endpoints.

Lists registered features and reads or writes their persisted settings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from taggerlink.db.database import get_store
from taggerlink.db.storage import SessionStore
from taggerlink.features import FEATURES, Feature, SettingValue, UnknownSettingError

router = APIRouter(prefix="/features", tags=["features"])


class SettingDefinitionResponse(BaseModel):
    id: str
    label: str
    input: str


class FeatureResponse(BaseModel):
    """Static description of a registered feature."""

    id: str
    title: str
    section: str
    description: str
    future_feature: bool
    settings_defaults: dict[str, SettingValue]
    setting_definitions: list[SettingDefinitionResponse] = Field(default_factory=list)


class FeatureSettingsResponse(BaseModel):
    feature_id: str
    settings: dict[str, SettingValue]


class SettingUpdateRequest(BaseModel):
    value: SettingValue = Field(..., examples=[True])


def _get_feature(feature_id: str) -> type[Feature]:
    feature = FEATURES.get(feature_id)
    if feature is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown feature: {feature_id}",
        )
    return feature


@router.get("", response_model=list[FeatureResponse])
async def list_features() -> list[FeatureResponse]:
    """List registered features."""
    return [
        FeatureResponse(
            id=feature.metadata.id,
            title=feature.metadata.title,
            section=feature.metadata.section,
            description=feature.metadata.description,
            future_feature=feature.metadata.future_feature,
            settings_defaults=feature.settings_defaults,
            setting_definitions=[
                SettingDefinitionResponse(id=d.id, label=d.label, input=d.input)
                for d in feature.setting_definitions
            ],
        )
        for feature in FEATURES.values()
    ]


@router.get("/{feature_id}/settings", response_model=FeatureSettingsResponse)
async def get_feature_settings(
    feature_id: str,
    store: Annotated[SessionStore, Depends(get_store)],
) -> FeatureSettingsResponse:
    """
    Get a feature's settings merged over its defaults.

    The first read for a feature computes and may persist its enabled state.
    """
    feature = _get_feature(feature_id)
    feature_settings = await feature.get_settings(store)
    return FeatureSettingsResponse(feature_id=feature_id, settings=feature_settings)


@router.put("/{feature_id}/settings/{setting}", response_model=FeatureSettingsResponse)
async def update_feature_setting(
    feature_id: str,
    setting: str,
    request: SettingUpdateRequest,
    store: Annotated[SessionStore, Depends(get_store)],
) -> FeatureSettingsResponse:
    """
    Save one setting.

    Returns 404 for unknown features and 422 for settings the feature
    does not declare.
    """
    feature = _get_feature(feature_id)

    try:
        await feature.save_setting(store, setting, request.value)
    except UnknownSettingError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e

    feature_settings = await feature.get_settings(store)
    return FeatureSettingsResponse(feature_id=feature_id, settings=feature_settings)
