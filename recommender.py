"""
Deterministic career-domain recommendation from ledger totals
"""
from dataclasses import dataclass, field
from typing import List

from career_assessment import DOMAINS, DOMAIN_INFO


@dataclass
class RecommendationResult:
    recommended_domain: str
    confidence: int
    readiness: int
    explanation: str = ""
    roadmap_steps: List[str] = field(default_factory=list)
    resource_list: List[str] = field(default_factory=list)
    source: str = "heuristic"

    def to_dict(self):
        return {
            "recommendedField": self.recommended_domain,
            "confidence": self.confidence,
            "internshipReadiness": self.readiness,
            "explanation": self.explanation,
            "roadmap": list(self.roadmap_steps),
            "resources": list(self.resource_list),
            "source": self.source,
        }


def round_half_up(value):
    """Round like Math.round for the non-negative values used here"""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def clamp(value, low, high):
    return max(low, min(high, value))


def rank_domains(totals, domains=DOMAINS):
    # sorted() is stable, so ties keep declaration order
    return sorted(domains, key=lambda d: totals.get(d, 0), reverse=True)


def with_content(result, content=DOMAIN_INFO):
    """Attach roadmap and resources from the static table for the chosen domain"""
    info = content.get(result.recommended_domain) or {}
    result.roadmap_steps = list(info.get("roadmap", []))
    result.resource_list = list(info.get("resources", []))
    return result


def recommend(totals, domains=DOMAINS, content=DOMAIN_INFO) -> RecommendationResult:
    top = rank_domains(totals, domains)[0]
    values = [totals.get(d, 0) for d in domains]

    confidence = clamp(round_half_up(100 * totals.get(top, 0) / max(1, max(values))), 60, 95)
    readiness = clamp(round_half_up(sum(values) * 2), 40, 95)

    info = content.get(top) or {}
    result = RecommendationResult(
        recommended_domain=top,
        confidence=confidence,
        readiness=readiness,
        explanation=info.get("explanation", ""),
    )
    return with_content(result, content)


def performance_summary(game_scores, top_domain):
    """Headline and message for the average career-game score"""
    scores = [g.score for g in game_scores]
    avg = round_half_up(sum(scores) / len(scores)) if scores else 0

    if avg >= 80:
        headline = "Excellent Performance!"
        message = (f"Based on your strong performance (avg: {avg}%), you show great potential in "
                   f"{top_domain}. You're ready for advanced challenges and leadership roles in tech.")
    elif avg >= 65:
        headline = "Strong Foundation!"
        message = (f"With your solid performance (avg: {avg}%), you have a good foundation in "
                   f"{top_domain}. Focus on building deeper expertise in your strongest areas.")
    else:
        headline = "Learning Opportunity!"
        message = (f"Your performance (avg: {avg}%) shows room for growth in {top_domain}. "
                   f"Consider starting with foundational courses and practice projects.")

    return {"averageScore": avg, "headline": headline, "message": message}
