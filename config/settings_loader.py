"""
Centralized Service Configuration Loader

This module provides a single point of access for the service's runtime configuration
(data directory, proxy base address, search template, support-chat provider).
It is NOT the per-profile UserSettings object; that lives in core.settings_store.

Usage:
    from config.settings_loader import load_settings, get_proxy_base

    # Access configuration
    base = get_proxy_base()
    model = load_settings()["support"]["model"]

Drop a config/settings.json beside the defaults to override them.
"""

import json
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
CONFIG_DIR = Path(__file__).parent
PROJECT_ROOT = CONFIG_DIR.parent
SETTINGS_FILE = CONFIG_DIR / "settings.json"
DEFAULTS_FILE = CONFIG_DIR / "settings.defaults.json"

# --- Settings Cache ---
_settings_cache = None


def load_settings() -> dict:
    """Load configuration from file. Uses cache if already loaded."""
    global _settings_cache
    if _settings_cache is None:
        if SETTINGS_FILE.exists():
            _settings_cache = json.loads(SETTINGS_FILE.read_text())
        elif DEFAULTS_FILE.exists():
            # No override file yet, run on the shipped defaults
            _settings_cache = json.loads(DEFAULTS_FILE.read_text())
        else:
            raise FileNotFoundError(f"No settings files found in {CONFIG_DIR}")
    return _settings_cache


# --- Convenience Accessors ---
# Environment variables win over the JSON files

def get_data_dir() -> Path:
    """Directory holding the persisted profile stores."""
    configured = os.environ.get("COSMICLINK_DATA_DIR") or load_settings()["storage"]["data_dir"]
    path = Path(configured)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def get_proxy_base() -> str:
    """Base address of the external proxy; always ends with a slash."""
    base = os.environ.get("COSMICLINK_PROXY_BASE") or load_settings()["proxy"]["base_url"]
    return base if base.endswith("/") else base + "/"


def get_search_template() -> str:
    """Search fallback URL with a single {query} placeholder."""
    return load_settings()["proxy"]["search_template"]


def get_chat_config() -> dict:
    """Support-chat provider parameters (provider, model, max_tokens, temperature)."""
    return dict(load_settings()["support"])


def get_ollama_url(endpoint: str = "chat") -> str:
    """Get full Ollama URL for a specific endpoint."""
    base = load_settings()["ollama"]["base_url"]
    if endpoint == "base":
        return base
    endpoints = {
        "generate": "/api/generate",
        "chat": "/api/chat",
    }
    return f"{base}{endpoints.get(endpoint, '/api/' + endpoint)}"


def get_timeout() -> int:
    """Get provider timeout in seconds."""
    return load_settings()["ollama"]["timeout"]
