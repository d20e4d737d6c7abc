"""Offline extraction client.

Returns a fixed response without any network call. Useful for local runs
against a manifest without an API key, and as a template for new providers:
implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from fara_tracker.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Returns an empty extraction so every field resolves from the manifest."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "agent_name": "",
        "agent_address": "",
        "foreign_principal": "",
        "country": "",
        "compensation_entries": [],
        "total_compensation": 0,
        "services_description": "",
        "registration_date": "",
        "latest_period_start": "",
        "latest_period_end": "",
        "status": "active",
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        return json.dumps(self.DEFAULT_RESPONSE)
