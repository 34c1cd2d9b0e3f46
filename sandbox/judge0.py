"""Remote code execution through a Judge0-compatible sandbox."""
from __future__ import annotations

import base64
import binascii
import logging
import os
import time
from typing import Any, Callable, Dict, Optional, Protocol

import httpx

from agents.types import ExecutionResult
from config.settings import Settings
from errors import SandboxError, UnsupportedLanguage

logger = logging.getLogger(__name__)

LANGUAGE_MAP: Dict[str, int] = {
    "javascript": 93,  # Node.js
    "python": 71,  # Python 3.8
    "java": 62,  # OpenJDK 13
    "cpp": 54,  # GCC 9.2
}

PENDING_STATUS_MAX = 2  # 1 = In Queue, 2 = Processing


class SandboxRunner(Protocol):  # What the services need from a sandbox
    def execute(self, code: str, language: str) -> ExecutionResult: ...


class SandboxHttpClient(Protocol):
    def post(self, url: str, *, params: Dict[str, str], json: Dict[str, Any], headers: Dict[str, str]) -> Any: ...

    def get(self, url: str, *, params: Dict[str, str], headers: Dict[str, str]) -> Any: ...


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _b64decode(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        raw = base64.b64decode(value)
    except (binascii.Error, TypeError) as exc:
        logger.error("Sandbox returned undecodable base64: %s", exc)
        raise SandboxError("Sandbox payload was not valid base64") from exc
    return raw.decode("utf-8", errors="replace")


def result_from_submission(data: Dict[str, Any]) -> ExecutionResult:
    """Map a finished submission payload onto an :class:`ExecutionResult`."""

    status = data.get("status") or {}
    description = str(status.get("description", "Unknown"))
    output = _b64decode(data.get("stdout"))
    error: Optional[str] = None
    if data.get("stderr"):
        error = _b64decode(data["stderr"])
    elif data.get("compile_output"):
        error = _b64decode(data["compile_output"])
    elif description != "Accepted":
        error = _b64decode(data.get("message")) or description
    raw_time = data.get("time")
    return ExecutionResult(
        output=output,
        error=error,
        execution_time=float(raw_time) if raw_time not in (None, "") else None,
        memory=data.get("memory"),
        status=description,
    )


class SandboxClient:
    """Submits source code and polls until the sandbox reports a final status."""

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: Optional[SandboxHttpClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings
        self._client = http_client
        self._sleep = sleep

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "X-RapidAPI-Host": self._settings.SANDBOX_HOST}
        api_key = os.getenv(self._settings.SANDBOX_API_KEY_ENV)
        if api_key:
            headers["X-RapidAPI-Key"] = api_key
        return headers

    def execute(self, code: str, language: str) -> ExecutionResult:
        language_id = LANGUAGE_MAP.get(language.lower())
        if language_id is None:
            raise UnsupportedLanguage(language)
        if self._client is not None:
            return self._run(self._client, code, language_id)
        with httpx.Client(timeout=self._settings.SANDBOX_TIMEOUT_S) as client:
            return self._run(client, code, language_id)

    def _run(self, client: SandboxHttpClient, code: str, language_id: int) -> ExecutionResult:
        base = self._settings.SANDBOX_BASE_URL.rstrip("/")
        params = {"base64_encoded": "true", "fields": "*"}
        headers = self._headers()
        submitted = self._request(
            lambda: client.post(
                f"{base}/submissions",
                params=params,
                json={"language_id": language_id, "source_code": _b64encode(code)},
                headers=headers,
            )
        )
        token = submitted.get("token")
        if not token:
            raise SandboxError("Sandbox did not return a submission token")
        logger.info("Sandbox submission token=%s language_id=%d", token, language_id)

        for attempt in range(self._settings.SANDBOX_MAX_POLLS):
            data = self._request(lambda: client.get(f"{base}/submissions/{token}", params=params, headers=headers))
            status_id = int((data.get("status") or {}).get("id", 0))
            if status_id > PENDING_STATUS_MAX:
                logger.info("Sandbox finished token=%s polls=%d status_id=%d", token, attempt + 1, status_id)
                return result_from_submission(data)
            self._sleep(self._settings.SANDBOX_POLL_INTERVAL_S)
        raise SandboxError(f"Sandbox did not finish after {self._settings.SANDBOX_MAX_POLLS} polls")

    @staticmethod
    def _request(send: Callable[[], Any]) -> Dict[str, Any]:
        try:
            response = send()
        except Exception as exc:  # noqa: BLE001
            logger.error("Sandbox transport failure: %s", exc)
            raise SandboxError("Failed to execute code.") from exc
        if response.status_code >= 400:
            logger.error("Sandbox error status: %s", response.status_code)
            raise SandboxError(f"Sandbox returned status {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise SandboxError("Sandbox payload was not JSON") from exc
        if not isinstance(data, dict):
            raise SandboxError("Sandbox payload was not an object")
        return data


__all__ = ["LANGUAGE_MAP", "SandboxClient", "SandboxRunner", "result_from_submission"]
