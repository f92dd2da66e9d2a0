"""Research gateway providers."""

from alpha_tracker.config import Settings
from alpha_tracker.providers.research_gateway import ResearchGateway
from alpha_tracker.providers.response_parser import parse_json_response
from alpha_tracker.providers.stub_gateway import StubResearchGateway
from alpha_tracker.providers.openai_gateway import OpenAIResearchGateway


def create_research_gateway(settings: Settings) -> ResearchGateway:
    """Return the OpenAI gateway when an API key is configured, else the offline stub."""
    if settings.openai_api_key:
        return OpenAIResearchGateway(settings)
    return StubResearchGateway()


__all__ = [
    "ResearchGateway",
    "parse_json_response",
    "StubResearchGateway",
    "OpenAIResearchGateway",
    "create_research_gateway",
]
