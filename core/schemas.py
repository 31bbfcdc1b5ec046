"""
Pydantic Schemas for the navigation backend

Defines the data models for:
- NavigationRecord (one entry in the persisted history log)
- UserSettings (per-profile behavioral settings)
- TabCloaking (disguised title/icon of the hosting document)
- ChatTurn / ChatReply (support chat request and response)

Field names keep the camelCase wire names because they are also the
persisted JSON shape.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


AutoClearPolicy = Literal["never", "daily", "weekly", "exit"]
ProxyMethod = Literal["auto", "direct", "stealth"]
ChatRole = Literal["user", "assistant", "system"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# History
# =============================================================================

class NavigationRecord(BaseModel):
    """A single navigation in the history log."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    url: str
    icon: str = "globe"
    timestamp: datetime = Field(default_factory=_utcnow)
    keywords: Optional[str] = None
    category: Optional[str] = None


# =============================================================================
# Settings
# =============================================================================

class UserSettings(BaseModel):
    """Per-profile settings. Always stored and replaced as a whole object."""
    theme: str = "dark"
    fontSize: str = "medium"
    motionEffects: bool = True
    saveHistory: bool = True
    autoClearHistory: AutoClearPolicy = "never"
    preloading: bool = True
    proxyMethod: ProxyMethod = "auto"

    # Premium-gated
    advancedSearchTools: Optional[bool] = False
    instantResults: Optional[bool] = False
    enableNotifications: Optional[bool] = True
    extendedHistory: Optional[bool] = False
    customTheme: Optional[str] = None
    priorityProxy: Optional[bool] = False
    customHomepage: Optional[str] = None


class TabCloaking(BaseModel):
    """Disguise applied to the hosting document's title and icon."""
    title: str = "Google Classroom"
    iconType: str = "classroom"
    customIconUrl: Optional[str] = None
    favicon: Optional[str] = None
    customCSS: Optional[str] = None


# =============================================================================
# Navigation
# =============================================================================

class QuickLink(BaseModel):
    id: str
    name: str
    icon: str
    url: str


# =============================================================================
# Support chat
# =============================================================================

class ChatTurn(BaseModel):
    role: ChatRole
    content: str


class ChatReply(BaseModel):
    message: str
    shouldEscalate: bool = False


class ChatRequest(BaseModel):
    message: str
    previousMessages: List[ChatTurn] = Field(default_factory=list)
