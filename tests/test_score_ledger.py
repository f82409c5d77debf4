"""Tests for score_ledger.ScoreLedger replace-by-key accumulation."""

import pytest

from career_assessment import DOMAINS
from score_ledger import GameScoreEvent, InvalidDomainKey, NegativeDomainScore, QuizAnswerEvent, ScoreLedger


def test_empty_ledger_has_every_domain_at_zero(ledger):
    totals = ledger.current_totals()

    assert list(totals) == DOMAINS
    assert set(totals.values()) == {0}
    assert not ledger.has_activity()


def test_quiz_and_game_events_are_summed(ledger):
    ledger.record_quiz_answer(QuizAnswerEvent(1, 0, {"SDE": 3, "Cloud": 1}))
    ledger.record_quiz_answer(QuizAnswerEvent(2, 4, {"SDE": 1, "Tester": 3}))
    ledger.record_game_score(GameScoreEvent("cyber-chase", 88, {"Cybersecurity": 16, "Cloud": 8}))

    totals = ledger.current_totals()

    assert totals["SDE"] == 4
    assert totals["Cloud"] == 9
    assert totals["Tester"] == 3
    assert totals["Cybersecurity"] == 16
    assert totals["Data Analyst"] == 0
    assert ledger.has_activity()


def test_reanswering_a_question_replaces_its_contribution(ledger):
    ledger.record_quiz_answer(QuizAnswerEvent(1, 0, {"SDE": 3}))
    ledger.record_quiz_answer(QuizAnswerEvent(1, 5, {"Product Manager": 3, "SDE": 1}))

    totals = ledger.current_totals()

    assert totals["SDE"] == 1
    assert totals["Product Manager"] == 3
    assert len(ledger.quiz_answers()) == 1
    assert ledger.quiz_answers()[0].chosen_option_index == 5


def test_replaying_a_game_replaces_its_score(ledger):
    ledger.record_game_score(GameScoreEvent("bug-buster", 45, {"SDE": 5, "Tester": 3}))
    ledger.record_game_score(GameScoreEvent("bug-buster", 85, {"SDE": 15, "Tester": 8}))

    assert ledger.current_totals()["SDE"] == 15
    assert ledger.current_totals()["Tester"] == 8
    assert [g.score for g in ledger.game_scores()] == [85]


def test_latest_event_per_key_matches_fresh_ledger():
    history = [
        QuizAnswerEvent(1, 0, {"SDE": 3}),
        QuizAnswerEvent(2, 1, {"Cybersecurity": 3}),
        QuizAnswerEvent(1, 2, {"Data Analyst": 3}),
        QuizAnswerEvent(2, 1, {"Cybersecurity": 2, "Cloud": 1}),
    ]
    replayed = ScoreLedger(DOMAINS)
    for event in history:
        replayed.record_quiz_answer(event)

    fresh = ScoreLedger(DOMAINS)
    fresh.record_quiz_answer(history[2])
    fresh.record_quiz_answer(history[3])

    assert replayed.current_totals() == fresh.current_totals()


def test_unknown_domain_is_rejected_without_changing_totals(ledger):
    ledger.record_quiz_answer(QuizAnswerEvent(1, 0, {"SDE": 3}))

    with pytest.raises(InvalidDomainKey) as excinfo:
        ledger.record_game_score(GameScoreEvent("career-sim", 80, {"Astronaut": 15, "SDE": 2}))

    assert excinfo.value.keys == ["Astronaut"]
    assert ledger.current_totals()["SDE"] == 3
    assert ledger.game_scores() == []


def test_negative_delta_is_rejected_without_changing_totals(ledger):
    ledger.record_quiz_answer(QuizAnswerEvent(1, 0, {"SDE": 3}))

    with pytest.raises(NegativeDomainScore) as excinfo:
        ledger.record_quiz_answer(QuizAnswerEvent(2, 0, {"SDE": -10, "Cloud": 1}))
    with pytest.raises(NegativeDomainScore):
        ledger.record_game_score(GameScoreEvent("bug-buster", 50, {"Tester": -1}))

    assert excinfo.value.keys == ["SDE"]
    assert ledger.current_totals()["SDE"] == 3
    assert len(ledger.quiz_answers()) == 1
    assert ledger.game_scores() == []


def test_session_round_trip_keeps_events():
    ledger = ScoreLedger(DOMAINS)
    ledger.record_quiz_answer(QuizAnswerEvent(3, 2, {"Data Analyst": 3, "SDE": 1}))
    ledger.record_game_score(GameScoreEvent("code-match", 90, {"SDE": 12, "Cloud": 8}))

    restored = ScoreLedger.from_dict(DOMAINS, ledger.to_dict())

    assert restored.current_totals() == ledger.current_totals()
    assert restored.quiz_answers() == ledger.quiz_answers()
    assert restored.game_scores() == ledger.game_scores()


def test_from_dict_accepts_missing_data():
    assert ScoreLedger.from_dict(DOMAINS, None).current_totals() == {d: 0 for d in DOMAINS}
