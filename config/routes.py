from __future__ import annotations  # Configuration schema for LLM routing

from pathlib import Path
from typing import Dict

from pydantic import BaseModel, Field

TASKS = ("hints", "report", "follow_up", "problem")


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str = "/v1/chat/completions"
    model: str
    timeout_s: float = Field(default=60.0, ge=0.1)
    api_key_env: str | None = None
    supports_json_mode: bool = True
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False


class AppConfig(BaseModel):  # Application configuration root
    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str]


def load_config(path: Path) -> AppConfig:  # Load configuration from disk
    data = path.read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def resolve_route(cfg: AppConfig, target: str) -> LlmRoute:  # Map a task to its configured route
    if target not in cfg.registry:
        raise KeyError(f"Registry entry missing for '{target}'")
    route_id = cfg.registry[target]
    if route_id not in cfg.llm_routes:
        raise KeyError(f"Route '{route_id}' missing for '{target}'")
    return cfg.llm_routes[route_id]


def resolve_all(cfg: AppConfig) -> Dict[str, LlmRoute]:  # Resolve every task the service needs
    return {target: resolve_route(cfg, target) for target in TASKS}
