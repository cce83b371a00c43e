"""
Feature base class and settings persistence.

Each feature declares static metadata and a dict of settings defaults.
Settings are stored as one record per feature id and merged over the
defaults on every read, so defaults added in later releases show up
without a migration.

Known defect: save_setting is a read-modify-write with no locking.
Concurrent saves on the same feature can lose updates.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Literal

from taggerlink.constants import FeatureIds
from taggerlink.db.storage import KeyValueStore

logger = logging.getLogger(__name__)

SettingValue = str | int | float | bool | dict[str, str]


class UnknownSettingError(ValueError):
    """Raised when saving a setting the feature does not declare."""

    def __init__(self, feature_id: str, setting: str) -> None:
        super().__init__(f'Could not find setting "{setting}" on feature "{feature_id}"')
        self.feature_id = feature_id
        self.setting = setting


@dataclass(frozen=True)
class FeatureMetadata:
    """
    Static description of a feature.

    Attributes:
        id: Storage key and registry id
        title: Display title
        section: Settings page section
        description: One-line description
        future_feature: Experimental features start disabled
    """

    id: str
    title: str
    section: str
    description: str
    future_feature: bool = False


@dataclass(frozen=True)
class SettingDefinition:
    id: str
    label: str
    input: Literal["checkbox"] = "checkbox"


class Feature(ABC):
    """Base class for features with persisted settings."""

    metadata: ClassVar[FeatureMetadata]
    settings_defaults: ClassVar[dict[str, SettingValue]]
    setting_definitions: ClassVar[list[SettingDefinition]] = []

    @abstractmethod
    async def run(self, store: KeyValueStore, page_html: str) -> None:
        """Apply the feature to a host page."""

    @classmethod
    async def is_enabled(cls, store: KeyValueStore) -> bool:
        settings = await cls.get_settings(store)
        return bool(settings["enabled"])

    @classmethod
    async def enable(cls, store: KeyValueStore) -> None:
        await cls.save_setting(store, "enabled", True)

    @classmethod
    async def disable(cls, store: KeyValueStore) -> None:
        await cls.save_setting(store, "enabled", False)

    @classmethod
    async def save_setting(cls, store: KeyValueStore, setting: str, value: SettingValue) -> None:
        """
        Persist one setting.

        Raises:
            UnknownSettingError: If the setting is not in settings_defaults.
                Nothing is read or written in that case.
        """
        if setting not in cls.settings_defaults:
            raise UnknownSettingError(cls.metadata.id, setting)

        settings = await cls.get_settings(store)
        settings[setting] = value

        await store.set(cls.metadata.id, settings)

    @classmethod
    async def get_settings(cls, store: KeyValueStore) -> dict[str, SettingValue]:
        """
        Read settings merged over defaults.

        On the very first read the enabled state is computed: experimental
        features start disabled, and everything starts disabled when the
        future-feature opt-in is explicitly off. Non-experimental features
        persist that computed state right away, so toggling the opt-in later
        does not change them.
        """
        settings = await store.get(cls.metadata.id)

        if settings is None:
            opt_in = await store.get(FeatureIds.FUTURE_FEATURE_OPT_IN.value)
            opt_in_disabled = isinstance(opt_in, dict) and opt_in.get("enabled") is False

            settings = {
                "enabled": not opt_in_disabled and not cls.metadata.future_feature,
            }
            logger.debug("Computed first settings for %s: %s", cls.metadata.id, settings)

            if not cls.metadata.future_feature:
                await store.set(cls.metadata.id, settings)

        return {**cls.settings_defaults, **settings}

    @classmethod
    async def save_data(cls, store: KeyValueStore, key: str, value: SettingValue) -> None:
        await store.set(f"{cls.metadata.id}:{key}", value)

    @classmethod
    async def get_data(cls, store: KeyValueStore, key: str) -> SettingValue | None:
        value: SettingValue | None = await store.get(f"{cls.metadata.id}:{key}")
        return value
