import uuid
from datetime import datetime
from flask import request, jsonify, make_response, session
from app import app, log
from app_config import AppConfig
from analysis import analyze
from career_assessment import (
    CAREER_GAMES, DOMAINS, DOMAIN_INFO, INTERNSHIPS, QUIZ_QUESTIONS,
    CareerAssessment, internship_fit_score
)
from gemini_service import get_gemini_client
from grewt_chat import ChatTranscript, grewt_reply, sanitize_message
from models import ScopedStore
from recommender import performance_summary, rank_domains, recommend
from score_ledger import InvalidDomainKey, ScoreLedger
from wellness import CHECK_INTERVAL_SECONDS, WellnessScheduler

# Rate limiting storage (in production, use Redis)
rate_limit_store = {}

def rate_limit(key, limit=20, window=60):
    """Simple sliding-window rate limiting"""
    now = datetime.utcnow().timestamp()

    # Clean old entries; keys with nothing left in the window are dropped
    for k in list(rate_limit_store):
        recent = [t for t in rate_limit_store[k] if now - t < window]
        if recent:
            rate_limit_store[k] = recent
        else:
            del rate_limit_store[k]

    hits = rate_limit_store.setdefault(key, [])
    if len(hits) >= limit:
        return False

    hits.append(now)
    return True

class InvalidRequest(ValueError):
    """Request body failed validation"""

# --------- Session helpers ----------
def session_id():
    if "sid" not in session:
        session["sid"] = uuid.uuid4().hex
    return session["sid"]

def load_ledger():
    return ScoreLedger.from_dict(DOMAINS, session.get("ledger"))

def save_ledger(ledger):
    session["ledger"] = ledger.to_dict()

def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data

def int_field(data, name):
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise InvalidRequest(f"'{name}' must be an integer")
    return int(value)

def ledger_payload(ledger):
    totals = ledger.current_totals()
    top = rank_domains(totals)[0]
    return {
        "totalDomainScores": totals,
        "hasActivity": ledger.has_activity(),
        **ledger.to_dict(),
        "performance": performance_summary(ledger.game_scores(), DOMAIN_INFO[top]["title"]),
    }

def ledger_from_body(data):
    """Ledger snapshot from an explicit {quizAnswers, gameScores, totalDomainScores} body"""
    try:
        ledger = ScoreLedger.from_dict(DOMAINS, data)
    except InvalidDomainKey:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise InvalidRequest(f"Malformed assessment data: {e}")
    if any(not 0 <= g.score <= 100 for g in ledger.game_scores()):
        raise InvalidRequest("Game scores must be between 0 and 100")

    totals = data.get("totalDomainScores")
    if totals is None:
        return ledger, ledger.current_totals()
    if not isinstance(totals, dict):
        raise InvalidRequest("'totalDomainScores' must be an object")

    unknown = set(totals) - set(DOMAINS)
    if unknown:
        raise InvalidDomainKey(unknown)
    try:
        merged = {domain: int(totals.get(domain, 0)) for domain in DOMAINS}
    except (TypeError, ValueError):
        raise InvalidRequest("Domain scores must be integers")
    if any(value < 0 for value in merged.values()):
        raise InvalidRequest("Domain scores must not be negative")
    return ledger, merged

# --------- Error handlers ----------
@app.errorhandler(InvalidRequest)
def handle_invalid_request(e):
    return jsonify({"error": str(e)}), 400

@app.errorhandler(InvalidDomainKey)
def handle_invalid_domain(e):
    log.warning(f"Rejected ledger update: {e}")
    return jsonify({"error": str(e), "domains": DOMAINS}), 400

# --------- Routes ----------
@app.route("/", methods=["GET"])
def index():
    config = AppConfig.load_config()
    cache_buster = AppConfig.get_cache_buster()

    resp = make_response(jsonify({
        "app": config["app_name"],
        "tagline": config["app_tagline"],
        "version": config["version"],
        "domains": DOMAINS,
        "endpoints": sorted(
            str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/api/")
        ),
    }))
    resp.headers["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"
    resp.headers["ETag"] = f"skillsync-{cache_buster}"
    return resp

@app.route("/api/quiz", methods=["GET"])
def quiz_questions():
    return jsonify({
        "questions": [
            {"id": q["id"], "question": q["question"], "options": q["options"]}
            for q in QUIZ_QUESTIONS
        ]
    })

@app.route("/api/games", methods=["GET"])
def career_games():
    return jsonify({
        "games": [
            {"id": g["id"], "title": g["title"], "description": g["description"], "domain": g["domain"]}
            for g in CAREER_GAMES
        ]
    })

@app.route("/api/quiz/answer", methods=["POST"])
def record_quiz_answer():
    data = json_body()
    try:
        event = CareerAssessment().quiz_answer_event(
            int_field(data, "questionId"), int_field(data, "optionIndex")
        )
    except ValueError as e:
        raise InvalidRequest(str(e))

    ledger = load_ledger()
    ledger.record_quiz_answer(event)
    save_ledger(ledger)
    return jsonify(ledger_payload(ledger))

@app.route("/api/games/score", methods=["POST"])
def record_game_score():
    data = json_body()
    try:
        event = CareerAssessment().game_score_event(
            str(data.get("gameId", "")), int_field(data, "score"), data.get("choice")
        )
    except ValueError as e:
        raise InvalidRequest(str(e))

    ledger = load_ledger()
    ledger.record_game_score(event)
    save_ledger(ledger)
    return jsonify(ledger_payload(ledger))

@app.route("/api/ledger", methods=["GET"])
def ledger_status():
    return jsonify(ledger_payload(load_ledger()))

@app.route("/api/session/reset", methods=["POST"])
def reset_session():
    session.pop("ledger", None)
    return jsonify(ledger_payload(load_ledger()))

@app.route("/api/analyze", methods=["POST"])
async def analyze_career():
    data = json_body()
    if data:
        ledger, totals = ledger_from_body(data)
    else:
        ledger = load_ledger()
        totals = ledger.current_totals()

    result = await analyze(totals, ledger.quiz_answers(), ledger.game_scores(), get_gemini_client())
    log.info(f"Analysis: {result.recommended_domain} via {result.source}")
    return jsonify(result.to_dict())

@app.route("/api/internships", methods=["GET"])
def internships():
    skills = [s.strip() for s in request.args.get("skills", "").split(",") if s.strip()]
    ledger = load_ledger()
    top = recommend(ledger.current_totals()).recommended_domain if ledger.has_activity() else None

    listings = []
    for listing in INTERNSHIPS:
        item = dict(listing)
        item["fitScore"] = internship_fit_score(listing["skills"], skills)
        item["matchesRecommendation"] = listing["domain"] == top
        listings.append(item)
    listings.sort(key=lambda i: (i["fitScore"], i["matchesRecommendation"]), reverse=True)

    return jsonify({"recommendedField": top, "internships": listings})

@app.route("/api/grewt", methods=["POST"])
async def grewt_chat():
    config = AppConfig.load_config()
    sid = session_id()
    if not rate_limit(f"grewt_{sid}", limit=config["chat_rate_limit"], window=config["chat_rate_window_seconds"]):
        return jsonify({"error": "Too many messages. Take a breather and try again in a minute."}), 429

    data = json_body()
    try:
        message = sanitize_message(data.get("message", ""))
    except ValueError as e:
        raise InvalidRequest(str(e))

    transcript = ChatTranscript(ScopedStore(sid))
    transcript.add(data["message"].strip(), is_user=True)
    reply = await grewt_reply(message, get_gemini_client())
    transcript.add(reply, is_user=False)
    return jsonify({"response": reply})

@app.route("/api/grewt/history", methods=["GET"])
def grewt_history():
    transcript = ChatTranscript(ScopedStore(session_id()))
    return jsonify({"messages": transcript.messages()})

@app.route("/api/wellness/check", methods=["POST"])
def wellness_check():
    store = ScopedStore(session_id())
    scheduler = WellnessScheduler(store)
    fired = scheduler.due()
    if fired:
        transcript = ChatTranscript(store)
        for reminder in fired:
            transcript.add(reminder["message"], is_user=False, is_health_reminder=True)

    return jsonify({
        "reminders": [{"type": r["type"], "icon": r["icon"], "message": r["message"]} for r in fired],
        "nextDueIn": scheduler.next_due_in(),
        "checkInterval": CHECK_INTERVAL_SECONDS,
    })

@app.route("/api/wellness/trigger", methods=["POST"])
def wellness_trigger():
    data = json_body()
    store = ScopedStore(session_id())
    try:
        reminder = WellnessScheduler(store).trigger(str(data.get("type", "")))
    except ValueError as e:
        raise InvalidRequest(str(e))

    ChatTranscript(store).add(reminder["message"], is_user=False, is_health_reminder=True)
    return jsonify({"type": reminder["type"], "icon": reminder["icon"], "message": reminder["message"]})
