from __future__ import annotations  # Chat-completions gateway for the language model client

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import httpx
from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate

from config import LlmRoute
from errors import UpstreamError


logger = logging.getLogger(__name__)  # Module logger setup


_MODEL_LOCKS: Dict[str, threading.Lock] = {}
_MODEL_LOCKS_GUARD = threading.Lock()

_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_prompt}"),
        ("human", "{user_prompt}"),
    ]
)


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


@dataclass(frozen=True)
class CompletionOptions:  # Per-call sampling options
    temperature: Optional[float] = None
    json_mode: bool = False
    max_tokens: Optional[int] = None


class CompletionClient(Protocol):  # What the agents need from a model client
    supports_json_mode: bool

    def complete(self, system_prompt: str, user_prompt: str, options: Optional[CompletionOptions] = None) -> str: ...


class LanguageModelClient:
    """Stateless request/response client bound to one configured route."""

    def __init__(self, route: LlmRoute, *, http_client: Optional[HttpClient] = None) -> None:
        self._route = route
        self._client = http_client

    @property
    def route(self) -> LlmRoute:
        return self._route

    @property
    def supports_json_mode(self) -> bool:
        return self._route.supports_json_mode

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Optional[CompletionOptions] = None,
    ) -> str:
        messages = [_message_dict(message) for message in _PROMPT.format_messages(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )]
        return complete_messages(messages, cfg=self._route, client=self._client, options=options)


def complete_messages(
    messages: List[Dict[str, str]],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[CompletionOptions] = None,
) -> str:  # Send one chat-completions request and return the message text
    opts = options or CompletionOptions()

    def _execute() -> str:
        payload: Dict[str, Any] = {"model": cfg.model, "messages": messages}
        if opts.temperature is not None:
            payload["temperature"] = opts.temperature
        if opts.max_tokens is not None:
            payload["max_tokens"] = opts.max_tokens
        if opts.json_mode and cfg.supports_json_mode:
            payload["response_format"] = {"type": "json_object"}
        headers = {"Content-Type": "application/json"}
        if cfg.api_key_env:
            api_key = os.getenv(cfg.api_key_env)
            if api_key:
                headers["Authorization"] = f"Bearer {api_key}"
        headers.update(cfg.extra_headers)
        preview = _preview(messages)
        if len(preview) > 120:
            preview = preview[:117] + "..."
        logger.info(
            "LLM request send route=%s model=%s json_mode=%s preview=%s",
            cfg.name,
            cfg.model,
            "response_format" in payload,
            preview,
        )
        try:
            response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
        except Exception as exc:  # noqa: BLE001
            logger.error("LLM transport failure: %s", exc)
            raise UpstreamError("LLM transport failed") from exc
        try:
            if response.status_code >= 400:
                logger.error("LLM error status: %s", response.status_code)
                raise UpstreamError(f"LLM returned status {response.status_code}")
            try:
                data = response.json()
            except ValueError as exc:
                logger.error("Invalid JSON payload from LLM: %s", exc)
                raise UpstreamError("LLM payload was not JSON") from exc
            content = _extract_content(data)
        finally:
            _close_safely(close_cb)
        logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
        return content

    if cfg.sequential:
        with _lock_for(cfg):
            return _execute()
    return _execute()


def _lock_for(cfg: LlmRoute) -> threading.Lock:
    key = cfg.name or f"{cfg.base_url}{cfg.endpoint}"
    with _MODEL_LOCKS_GUARD:
        lock = _MODEL_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _MODEL_LOCKS[key] = lock
    return lock


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        response = client.post(url, json=payload, headers=headers, timeout=timeout)
        return response, None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _preview(messages: List[Dict[str, str]]) -> str:  # Build preview string for logging
    for message in reversed(messages):
        text = message.get("content", "").strip()
        if text:
            return text.splitlines()[0]
    return ""


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
        if isinstance(data.get("content"), str):
            return data["content"]
    raise UpstreamError("LLM response missing content")


def _message_dict(message: BaseMessage) -> Dict[str, str]:  # Map LangChain BaseMessage to role/content dict
    role = message.type
    if role == "human":
        role = "user"
    elif role == "ai":
        role = "assistant"
    content = message.content
    if not isinstance(content, str):
        content = str(content)
    return {"role": role, "content": content}
