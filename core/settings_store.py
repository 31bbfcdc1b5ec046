"""
Settings and Tab-Cloak stores.

Both hold one complete pydantic object each, persisted under its own key.
Updates replace the whole object (the form layer merges before calling
replace); reset writes the fixed default back.

The cloak profile's effect on the hosting document is NOT reactive: callers
invoke apply_cloak() after a successful cloak update, and clear_all_data()
re-applies the default profile itself.
"""

import logging
from dataclasses import dataclass
from typing import Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from core.schemas import TabCloaking, UserSettings
from core.storage import CLOAK_KEY, SETTINGS_KEY, JsonKeyValueStore

logger = logging.getLogger("settings")

T = TypeVar("T", bound=BaseModel)

CLOAK_PRESETS = [
    TabCloaking(title="Google", iconType="google"),
    TabCloaking(title="Google Classroom", iconType="classroom"),
    TabCloaking(title="Google Docs", iconType="docs"),
    TabCloaking(title="Microsoft", iconType="microsoft"),
]


class _ObjectStore(Generic[T]):
    """A single persisted pydantic object with whole-value replace/reset."""

    # Subclasses must define these
    SCHEMA_CLASS: Type[T] = None
    KEY: str = None

    def __init__(self, storage: JsonKeyValueStore):
        self.storage = storage

    def default(self) -> T:
        return self.SCHEMA_CLASS()

    def get(self) -> T:
        raw = self.storage.get(self.KEY)
        if raw is None:
            return self.default()
        try:
            return self.SCHEMA_CLASS.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"⚠️ Stored {self.KEY} is invalid, using defaults: {e.error_count()} error(s)")
            return self.default()

    def replace(self, value: T) -> T:
        value = self.SCHEMA_CLASS.model_validate(value)
        self.storage.set(self.KEY, value.model_dump(mode="json"))
        return value

    def reset(self) -> T:
        value = self.default()
        self.storage.set(self.KEY, value.model_dump(mode="json"))
        return value


class SettingsStore(_ObjectStore[UserSettings]):
    SCHEMA_CLASS = UserSettings
    KEY = SETTINGS_KEY


class CloakStore(_ObjectStore[TabCloaking]):
    SCHEMA_CLASS = TabCloaking
    KEY = CLOAK_KEY


@dataclass
class DocumentHandle:
    """The hosting document as far as cloaking is concerned."""
    title: str = "CosmicLink"
    icon: str = "default"
    icon_url: Optional[str] = None


def apply_cloak(profile: TabCloaking, document: DocumentHandle) -> DocumentHandle:
    """Push the cloak profile onto the document. Blank titles leave the title alone."""
    if profile.title:
        document.title = profile.title
    document.icon = profile.iconType
    if profile.iconType == "custom":
        document.icon_url = profile.customIconUrl or profile.favicon
    else:
        document.icon_url = profile.favicon
    logger.info(f"🎭 Document cloaked as '{document.title}' ({document.icon})")
    return document


def clear_all_data(history, settings: SettingsStore, cloak: CloakStore, document: Optional[DocumentHandle] = None):
    """Clear history, reset settings and cloak profile, and wipe the profile storage."""
    history.clear()
    settings.reset()
    default_cloak = cloak.reset()
    settings.storage.clear()
    if document is not None:
        apply_cloak(default_cloak, document)
    logger.info("🧹 All local data cleared")
