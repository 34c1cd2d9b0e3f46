from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import CompletionClient, CompletionOptions, HttpClient, HttpResponse, LanguageModelClient, complete_messages

__all__ = ["CompletionClient", "CompletionOptions", "HttpClient", "HttpResponse", "LanguageModelClient", "complete_messages"]
