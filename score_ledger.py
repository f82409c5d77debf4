"""
Per-domain score ledger for a SkillSync session.

Quiz answers are keyed by question id and game results by game id. Recording
an event for a key that already has one replaces the earlier contribution,
so totals always equal the sum of the latest event per key.
"""
from dataclasses import dataclass, field
from typing import Dict, List


class InvalidDomainKey(ValueError):
    """An event referenced a domain outside the ledger's enumeration"""

    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__(f"Unknown domain(s): {', '.join(self.keys)}")


class NegativeDomainScore(ValueError):
    """An event tried to lower a domain total; merges only add"""

    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__(f"Negative score for domain(s): {', '.join(self.keys)}")


@dataclass(frozen=True)
class QuizAnswerEvent:
    question_id: int
    chosen_option_index: int
    per_domain_delta: Dict[str, int] = field(default_factory=dict)

    def to_dict(self):
        return {
            "questionId": self.question_id,
            "optionIndex": self.chosen_option_index,
            "domainScores": dict(self.per_domain_delta),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            question_id=int(data["questionId"]),
            chosen_option_index=int(data["optionIndex"]),
            per_domain_delta={k: int(v) for k, v in data.get("domainScores", {}).items()},
        )


@dataclass(frozen=True)
class GameScoreEvent:
    game_id: str
    score: int
    per_domain_delta: Dict[str, int] = field(default_factory=dict)

    def to_dict(self):
        return {
            "gameId": self.game_id,
            "score": self.score,
            "domainScores": dict(self.per_domain_delta),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            game_id=str(data["gameId"]),
            score=int(data["score"]),
            per_domain_delta={k: int(v) for k, v in data.get("domainScores", {}).items()},
        )


class ScoreLedger:
    def __init__(self, domains: List[str]):
        self.domains = list(domains)
        self._quiz: Dict[int, QuizAnswerEvent] = {}
        self._games: Dict[str, GameScoreEvent] = {}

    def _check_domains(self, delta):
        unknown = set(delta) - set(self.domains)
        if unknown:
            raise InvalidDomainKey(unknown)
        negative = [domain for domain, value in delta.items() if value < 0]
        if negative:
            raise NegativeDomainScore(negative)

    def record_quiz_answer(self, event: QuizAnswerEvent):
        self._check_domains(event.per_domain_delta)
        # pop first so a re-answer moves to the end of the answer order
        self._quiz.pop(event.question_id, None)
        self._quiz[event.question_id] = event

    def record_game_score(self, event: GameScoreEvent):
        self._check_domains(event.per_domain_delta)
        self._games.pop(event.game_id, None)
        self._games[event.game_id] = event

    def current_totals(self) -> Dict[str, int]:
        totals = {domain: 0 for domain in self.domains}
        for event in list(self._quiz.values()) + list(self._games.values()):
            for domain, delta in event.per_domain_delta.items():
                totals[domain] += delta
        return totals

    def quiz_answers(self) -> List[QuizAnswerEvent]:
        return list(self._quiz.values())

    def game_scores(self) -> List[GameScoreEvent]:
        return list(self._games.values())

    def has_activity(self) -> bool:
        return bool(self._quiz or self._games)

    def to_dict(self):
        """Retained events in a JSON-safe form for the session cookie"""
        return {
            "quizAnswers": [e.to_dict() for e in self._quiz.values()],
            "gameScores": [e.to_dict() for e in self._games.values()],
        }

    @classmethod
    def from_dict(cls, domains, data):
        ledger = cls(domains)
        for item in (data or {}).get("quizAnswers", []):
            ledger.record_quiz_answer(QuizAnswerEvent.from_dict(item))
        for item in (data or {}).get("gameScores", []):
            ledger.record_game_score(GameScoreEvent.from_dict(item))
        return ledger
