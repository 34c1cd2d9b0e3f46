from __future__ import annotations  # Sandbox package exports

from .judge0 import LANGUAGE_MAP, SandboxClient, SandboxRunner, result_from_submission

__all__ = ["LANGUAGE_MAP", "SandboxClient", "SandboxRunner", "result_from_submission"]
