"""Research gateway backed by the OpenAI Responses API with web search."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from alpha_tracker.config import Settings, get_settings
from alpha_tracker.core.exceptions import GatewayError, ResponseParseError
from alpha_tracker.domain.models import (
    CapitalFlow,
    Language,
    LimitUpStock,
    MarketIndex,
    MarketOpportunity,
    ReflectionAnalysis,
    ReflectionSummary,
    StockAnalysis,
    TopicAnalysis,
)
from alpha_tracker.providers import prompts
from alpha_tracker.providers.response_parser import parse_json_response
from alpha_tracker.providers.schemas import (
    CapitalPayload,
    LimitUpPayload,
    MarketIndicesPayload,
    OpportunitiesPayload,
    ReflectionAnalysisPayload,
    ReflectionSummaryPayload,
    StockAnalysisPayload,
    TopicAnalysisPayload,
)

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class OpenAIResearchGateway:
    """
    Research gateway that asks an OpenAI model to search the web and answer in JSON.

    Research calls (stocks, topics, market) enable the web search tool; journal
    coaching calls do not.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self._settings = settings or get_settings()
        self._client = client or AsyncOpenAI(
            api_key=self._settings.openai_api_key,
            timeout=self._settings.gateway_timeout_seconds,
        )

    async def analyze_stock(self, name: str, language: Language) -> StockAnalysis:
        payload = await self._ask(
            prompts.stock_prompt(name, language), StockAnalysisPayload, search=True, label=f"stock:{name}"
        )
        return payload.to_domain()

    async def analyze_topic(self, keyword: str, language: Language) -> TopicAnalysis:
        payload = await self._ask(
            prompts.topic_prompt(keyword, language), TopicAnalysisPayload, search=True, label=f"topic:{keyword}"
        )
        return payload.to_domain()

    async def analyze_reflection(self, entry: str, language: Language) -> ReflectionAnalysis:
        payload = await self._ask(
            prompts.reflection_prompt(entry, language),
            ReflectionAnalysisPayload,
            search=False,
            label="reflection",
            system=prompts.COACH_PROMPT,
        )
        return payload.to_domain()

    async def summarize_reflections(self, entries: list[str], language: Language) -> ReflectionSummary:
        payload = await self._ask(
            prompts.summary_prompt(entries, language),
            ReflectionSummaryPayload,
            search=False,
            label="reflection-summary",
            system=prompts.COACH_PROMPT,
        )
        return ReflectionSummary(
            content=payload.content,
            key_points=list(payload.key_points),
            generated_at=datetime.now(timezone.utc),
        )

    async def fetch_market_indices(self, language: Language) -> tuple[float, list[MarketIndex]]:
        payload = await self._ask(
            prompts.market_indices_prompt(language), MarketIndicesPayload, search=True, label="market:indices"
        )
        return payload.sentiment_score, [index.to_domain() for index in payload.indices]

    async def fetch_market_opportunities(self, language: Language) -> list[MarketOpportunity]:
        payload = await self._ask(
            prompts.market_opportunities_prompt(language),
            OpportunitiesPayload,
            search=True,
            label="market:opportunities",
        )
        return [item.to_domain() for item in payload.market_opportunities]

    async def fetch_limit_up_stocks(self, language: Language) -> list[LimitUpStock]:
        payload = await self._ask(
            prompts.limit_up_prompt(language), LimitUpPayload, search=True, label="market:limit-up"
        )
        return [item.to_domain() for item in payload.limit_up_stocks]

    async def fetch_market_capital(self, language: Language) -> CapitalFlow:
        payload = await self._ask(
            prompts.market_capital_prompt(language), CapitalPayload, search=True, label="market:capital"
        )
        return payload.capital_data.to_domain()

    async def _ask(
        self,
        prompt: str,
        model: type[PayloadT],
        search: bool,
        label: str,
        system: str = prompts.SYSTEM_PROMPT,
    ) -> PayloadT:
        """Send one prompt, then parse and validate the JSON answer."""
        request: dict[str, Any] = {
            "model": self._settings.research_model,
            "input": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        if search:
            request["tools"] = [{"type": self._settings.research_search_tool}]

        logger.info("Research request %s (model=%s)", label, self._settings.research_model)
        try:
            response = await self._client.responses.create(**request)
        except openai.APITimeoutError as exc:
            raise GatewayError(f"Research request {label} timed out", code="GATEWAY_TIMEOUT") from exc
        except openai.OpenAIError as exc:
            logger.error("Research request %s failed: %s", label, exc)
            raise GatewayError(f"Research request {label} failed: {exc}") from exc

        data = parse_json_response(response.output_text)
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            logger.error("Research response %s has unexpected shape: %s", label, exc)
            raise ResponseParseError(f"Research response {label} has unexpected shape") from exc
