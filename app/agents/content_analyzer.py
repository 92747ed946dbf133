import json
import logging
from functools import lru_cache
from typing import Awaitable, Optional, Protocol

import httpx
import openai
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openrouter import OpenRouterProvider

from app.core.config import ConfigurationError, Settings, get_settings
from app.models.analysis import AnalysisReport, InstagramContent, TargetAudience

logger = logging.getLogger(__name__)


class RequestError(Exception):
    """Raised when the analysis provider fails or returns an unusable report."""


class ReportRequester(Protocol):
    def __call__(
        self, audience: TargetAudience, content: InstagramContent
    ) -> Awaitable[AnalysisReport]: ...


SYSTEM_PROMPT = (
    "You are a social media marketing analyst. You receive structured JSON describing "
    "a target audience and a single Instagram post, and must respond ONLY with JSON "
    "matching the AnalysisReport schema:\n"
    "- interactivity: does the post invite comments, shares, saves or other participation?\n"
    "- entertainment: how enjoyable or engaging is the post for this audience?\n"
    "- relevance: how well does the post match the audience's age, gender, location and interests?\n"
    "- informativeness: how useful is the information the post conveys?\n"
    "  Each of the four criteria has a score (integer 0-10) and an explanation.\n"
    "- purchaseInfluence: likelihood the post influences a purchase decision, one of "
    "'Rendah', 'Sedang', 'Tinggi', plus an explanation.\n"
    "- overallSummary: concise overall assessment.\n"
    "- suggestions: concrete improvements, most important first.\n"
    "Write explanations, summary and suggestions in Indonesian. "
    "Use only the provided data; if the caption or link is missing, say what could not be judged."
)

content_agent = Agent(
    output_type=AnalysisReport,
    system_prompt=SYSTEM_PROMPT,
    retries=0,
)


@lru_cache
def get_model() -> Model:
    return build_model(get_settings())


def build_model(settings: Settings) -> Model:
    """Build the OpenRouter-backed chat model.

    Raises:
        ConfigurationError: If ``OPENROUTER_API_KEY`` is not configured.
    """

    if not settings.openrouter_api_key:
        raise ConfigurationError(
            "OPENROUTER_API_KEY environment variable is required. "
            "Please set it in your .env file or environment."
        )

    provider = OpenRouterProvider(api_key=settings.openrouter_api_key)
    return OpenAIChatModel(settings.openrouter_model, provider=provider)


def build_user_prompt(audience: TargetAudience, content: InstagramContent) -> str:
    payload = {
        "target_audience": {
            "age_min": audience.ageMin,
            "age_max": audience.ageMax,
            "gender": audience.gender.value,
            "location": audience.location,
            "interests": audience.interests,
        },
        "instagram_content": {
            "link": content.link or None,
            "caption": content.caption or None,
        },
    }

    return (
        "Analyze the marketing effectiveness of the following Instagram content for the "
        "given target audience and produce an AnalysisReport JSON.\n"
        f"{json.dumps(payload, ensure_ascii=False)}"
    )


async def request_analysis(
    audience: TargetAudience,
    content: InstagramContent,
    model: Optional[Model] = None,
) -> AnalysisReport:
    """Request a marketing-effectiveness report for one Instagram post.

    The input is assumed to have passed :func:`app.services.validator.validate_inputs`.
    Exactly one attempt is made; nothing is cached between calls.

    Args:
        audience: The target audience the content is evaluated against.
        content: The Instagram post link and/or caption.
        model: Model to run instead of the configured OpenRouter model.

    Returns:
        The complete, schema-validated :class:`AnalysisReport`.

    Raises:
        RequestError: If the model is not configured, the provider call fails,
            or the response does not match the report shape.
    """

    logger.info(
        "Requesting analysis (location=%s, link=%s)",
        audience.location,
        bool(content.link.strip()),
    )

    try:
        result = await content_agent.run(
            build_user_prompt(audience, content),
            model=model or get_model(),
        )
    except ConfigurationError as exc:
        logger.error("Analysis model is not configured: %s", exc)
        raise RequestError(str(exc)) from exc
    except (AgentRunError, httpx.HTTPError, openai.OpenAIError) as exc:
        logger.error("Analysis request failed: %s", exc)
        raise RequestError(f"Analysis request failed: {exc}") from exc

    report = result.output
    scores = ", ".join(
        f"{key.value}={criteria.score}" for key, criteria in report.criteria().items()
    )
    logger.info(
        "Analysis complete (%s, purchase likelihood=%s)",
        scores,
        report.purchaseInfluence.likelihood.value,
    )
    return report
