"""
Career analysis: Gemini-assisted when a client is available, heuristic otherwise.

analyze() always resolves to a RecommendationResult. Service failures and
payloads that do not match AnalysisPayload fall back to recommend().
"""
import json
import logging
import re

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from app_config import AppConfig
from career_assessment import DOMAINS, DOMAIN_INFO, CareerAssessment, domain_for_field
from gemini_service import ExternalServiceError
from recommender import RecommendationResult, clamp, recommend, round_half_up, with_content

log = logging.getLogger("skillsync.analysis")

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class AnalysisPayload(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    recommendedField: str
    confidence: float
    explanation: str
    internshipReadiness: float

    @field_validator("recommendedField")
    @classmethod
    def known_field(cls, value):
        domain = domain_for_field(value)
        if domain is None:
            raise ValueError(f"unknown field {value!r}")
        return domain

    @field_validator("explanation")
    @classmethod
    def non_empty(cls, value):
        if not value.strip():
            raise ValueError("explanation is empty")
        return value.strip()


def build_prompt(ledger_totals, raw_answers, raw_game_results):
    assessment = CareerAssessment()
    answers = "\n".join(
        f"Q{a.question_id}: {assessment.answer_text(a)}" for a in raw_answers
    ) or "(no quiz answers)"
    games = "\n".join(
        f"{g.game_id}: {g.score}/100" for g in raw_game_results
    ) or "(no games played)"
    totals = "\n".join(f"{domain}: {score}" for domain, score in ledger_totals.items())
    fields = ", ".join(DOMAIN_INFO[d]["title"] for d in DOMAINS)

    return f"""Analyze this computer science student's career assessment data and recommend the best-fit field:

Quiz Answers:
{answers}

Game Performance Scores:
{games}

Domain Scores:
{totals}

Available CS Fields: {fields}

Please respond with ONLY a JSON object containing:
- recommendedField: The best-fit field name (exact match from available fields)
- confidence: Confidence percentage (0-100)
- explanation: 2-3 sentence explanation of why this field fits
- internshipReadiness: Score 0-100 for internship readiness

Focus on the field with highest domain score but consider overall profile.
"""


def parse_analysis(text) -> RecommendationResult:
    """Validate a Gemini reply; any deviation raises ExternalServiceError"""
    cleaned = _FENCE_RE.sub("", text.strip())
    match = _OBJECT_RE.search(cleaned)
    if not match:
        raise ExternalServiceError("No JSON object in Gemini response")

    try:
        payload = AnalysisPayload.model_validate(json.loads(match.group(0)))
    except (ValueError, ValidationError) as e:
        raise ExternalServiceError(f"Malformed analysis payload: {e}") from e

    return RecommendationResult(
        recommended_domain=payload.recommendedField,
        confidence=clamp(round_half_up(payload.confidence), 0, 100),
        readiness=clamp(round_half_up(payload.internshipReadiness), 0, 100),
        explanation=payload.explanation,
        source="gemini",
    )


async def analyze(ledger_totals, raw_answers, raw_game_results, client=None) -> RecommendationResult:
    if client is None:
        return recommend(ledger_totals)

    prompt = build_prompt(ledger_totals, raw_answers, raw_game_results)
    generation = AppConfig.load_config()["analysis_generation"]
    try:
        text = await client.generate(prompt, generation)
        result = parse_analysis(text)
    except ExternalServiceError as e:
        log.warning(f"Gemini analysis unavailable, using heuristic: {e}")
        return recommend(ledger_totals)
    except Exception:
        log.exception("Unexpected error during Gemini analysis, using heuristic")
        return recommend(ledger_totals)

    return with_content(result)
