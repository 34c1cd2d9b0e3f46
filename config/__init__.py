"""Configuration package for the coding interview service."""
from .routes import TASKS, AppConfig, LlmRoute, load_config, resolve_all, resolve_route
from .settings import Settings, settings

__all__ = [
    "TASKS",
    "AppConfig",
    "LlmRoute",
    "load_config",
    "resolve_all",
    "resolve_route",
    "Settings",
    "settings",
]
