# Shared State Module
# Lazily created service handles shared across routers.
# Routers receive these through FastAPI dependencies, so tests can swap them
# with app.dependency_overrides; reset_state() tears everything down.

_storage = None
_history_store = None
_settings_store = None
_cloak_store = None
_document = None
_resolver = None
_support_triage = None
_retention = None


def get_storage():
    """Get the profile JsonKeyValueStore, creating it if needed."""
    global _storage
    if _storage is None:
        from config.settings_loader import get_data_dir
        from core.storage import JsonKeyValueStore
        _storage = JsonKeyValueStore(get_data_dir())
    return _storage


def get_history_store():
    global _history_store
    if _history_store is None:
        from core.history_store import HistoryStore
        _history_store = HistoryStore(get_storage())
    return _history_store


def get_settings_store():
    global _settings_store
    if _settings_store is None:
        from core.settings_store import SettingsStore
        _settings_store = SettingsStore(get_storage())
    return _settings_store


def get_cloak_store():
    global _cloak_store
    if _cloak_store is None:
        from core.settings_store import CloakStore
        _cloak_store = CloakStore(get_storage())
    return _cloak_store


def get_document():
    """The DocumentHandle the cloak profile is applied to."""
    global _document
    if _document is None:
        from core.settings_store import DocumentHandle, apply_cloak
        _document = apply_cloak(get_cloak_store().get(), DocumentHandle())
    return _document


def get_resolver():
    global _resolver
    if _resolver is None:
        from config.settings_loader import get_proxy_base, get_search_template
        from core.navigation import NavigationResolver
        _resolver = NavigationResolver(get_proxy_base(), get_search_template())
    return _resolver


def get_support_triage():
    global _support_triage
    if _support_triage is None:
        from config.settings_loader import get_chat_config
        from core.support_triage import SupportTriage
        _support_triage = SupportTriage.from_config(get_chat_config())
    return _support_triage


def get_retention_service():
    global _retention
    if _retention is None:
        from core.scheduler import HistoryRetentionService
        _retention = HistoryRetentionService(get_history_store())
    return _retention


def reset_state():
    """Drop every handle; the next access re-creates it from configuration."""
    global _storage, _history_store, _settings_store, _cloak_store
    global _document, _resolver, _support_triage, _retention
    if _retention is not None:
        _retention.shutdown()
    _storage = None
    _history_store = None
    _settings_store = None
    _cloak_store = None
    _document = None
    _resolver = None
    _support_triage = None
    _retention = None
