from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from crash_monitor.config import Settings
from crash_monitor.domain.indicators import IndicatorCatalogue, default_catalogue
from crash_monitor.domain.schemas import IndicatorReading
from crash_monitor.fetch.errors import FetchError, InvalidIndicatorError, MalformedResponseError
from crash_monitor.fetch.llm_client import AnthropicClient
from crash_monitor.fetch.parsing import parse_message

logger = logging.getLogger(__name__)


class MessageClient(Protocol):
    def create_message(self, prompt: str) -> Dict[str, Any]:
        raise NotImplementedError


class IndicatorFetchService:
    """
    Fetches one auto-fetch indicator through the LLM web-search call.

    The parsed object is returned as-is unless ``strict`` is set, in which
    case it must validate as an ``IndicatorReading``.
    """

    def __init__(
        self,
        client: MessageClient,
        catalogue: Optional[IndicatorCatalogue] = None,
        strict: bool = False,
    ):
        self.client = client
        self.catalogue = catalogue or default_catalogue()
        self.strict = strict
        self.prompts = self.catalogue.prompts()

    @classmethod
    def from_settings(cls, settings: Settings, catalogue: Optional[IndicatorCatalogue] = None) -> "IndicatorFetchService":
        return cls(
            client=AnthropicClient.from_settings(settings),
            catalogue=catalogue,
            strict=settings.strict,
        )

    def prompt_for(self, indicator_id: Any) -> str:
        if not isinstance(indicator_id, str) or indicator_id not in self.prompts:
            raise InvalidIndicatorError(indicator_id)
        return self.prompts[indicator_id]

    def fetch(self, indicator_id: Any) -> Any:
        prompt = self.prompt_for(indicator_id)

        try:
            message = self.client.create_message(prompt)
            result = parse_message(message)
            if self.strict:
                result = self._validate(result)
        except FetchError as e:
            logger.error(f"fetch-indicator error ({indicator_id}): {e}")
            raise

        return result

    def fetch_reading(self, indicator_id: Any) -> IndicatorReading:
        return IndicatorReading.model_validate(self._validate(self.fetch(indicator_id)))

    @staticmethod
    def _validate(result: Any) -> Dict[str, Any]:
        try:
            return IndicatorReading.model_validate(result).to_payload()
        except ValidationError as e:
            raise MalformedResponseError(f"Response does not match reading schema: {e.error_count()} error(s)") from e
