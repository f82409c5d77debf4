"""
Grewt, the SkillSync career buddy and wellness coach.

Replies come from Gemini with a fixed persona prompt; without a client, or
when the call fails, Grewt answers with a canned encouraging message.
"""
import logging
import re
import uuid
from datetime import datetime

from app_config import AppConfig
from gemini_service import ExternalServiceError

log = logging.getLogger("skillsync.grewt")

HISTORY_KEY = "grewt-chat-history"

WELCOME_MESSAGE = (
    "Hi 👋 I'm Grewt, your career buddy and wellness coach! Ask me anything about learning, roadmaps, "
    "skill-building, or let me help you stay healthy while coding! 🚀💚"
)

OFFLINE_REPLY = (
    "Hi there! 🤖✨ I'm Grewt, your career buddy and wellness coach! While I'm having some technical "
    "difficulties connecting to my AI brain, I'm still here to cheer you on and remind you to stay healthy! "
    "🚀💚 Keep practicing those skills - you're doing amazing! 🌱💪"
)

ERROR_REPLY = (
    "Oops! 🤖💫 My circuits got a bit tangled there! But hey, that's okay - even robots have off days! "
    "Remember to take breaks, stay hydrated, and keep coding awesome! 🚀✨💚"
)

GREWT_PERSONA = """You are Grewt, a friendly AI career mentor, wellness coach, and therapist for students using the SkillSync app. Your personality is:

- Mix of wise guru + supportive mentor + caring therapist + fun friend
- Motivational, positive, and encouraging about both career and mental/physical health
- Use emojis like 🌱🚀📘💪🎯✨💚🧘💧👀🚶 to make conversations engaging
- Give clear, actionable career and learning guidance
- Provide mental health support, stress management tips, and wellness reminders
- Encourage healthy coding habits: regular breaks, hydration, eye rest, posture, movement
- Address burnout, imposter syndrome, anxiety, and study stress with empathy
- Keep responses concise but helpful (2-4 sentences max)
- Sound like a caring friend who genuinely wants them to succeed AND stay healthy

When relevant, suggest SkillSync features:
- "Check out your roadmap tracker to see your progress! 🗺️"
- "Try the career games to discover your strengths! 🎮"
- "Your skill gap analysis might have some great course recommendations! 📚"
- "The internship finder can show roles that fit your skills! 💼"

For wellness topics, provide specific actionable advice: hydration, eye care for screen time
(20-20-20 rule), posture and stretches, stress management, sleep hygiene, and breathing exercises.

User message: "{message}"

Respond as Grewt with helpful advice, encouragement, wellness tips, and relevant SkillSync feature suggestions:"""


def sanitize_message(text, max_length=500):
    """Make user text safe to embed in the persona prompt"""
    if not isinstance(text, str):
        raise ValueError("Message must be text")

    text = re.sub(r"[\r\n\t]", " ", text)
    text = "".join(ch for ch in text if ch.isprintable())
    text = re.sub(r"\s+", " ", text).strip()

    if not text:
        raise ValueError("No message provided")
    if len(text) > max_length:
        raise ValueError(f"Message too long (max {max_length} characters)")
    return text.replace('"', '\\"')


async def grewt_reply(message, client=None):
    """Grewt's answer to an already-sanitized message; never raises"""
    if client is None:
        return OFFLINE_REPLY

    generation = AppConfig.load_config()["chat_generation"]
    try:
        return await client.generate(GREWT_PERSONA.format(message=message), generation)
    except ExternalServiceError as e:
        log.warning(f"Grewt API error: {e}")
    except Exception:
        log.exception("Unexpected Grewt error")
    return ERROR_REPLY


class ChatTranscript:
    """Chat history for one session, persisted on every change"""

    def __init__(self, store):
        self.store = store
        self._messages = store.get(HISTORY_KEY)
        if not self._messages:
            self._messages = [self._message(WELCOME_MESSAGE, is_user=False, message_id="welcome")]
            store.set(HISTORY_KEY, self._messages)

    @staticmethod
    def _message(text, is_user, is_health_reminder=False, message_id=None):
        return {
            "id": message_id or uuid.uuid4().hex,
            "text": text,
            "isUser": is_user,
            "timestamp": datetime.utcnow().isoformat(),
            "isHealthReminder": is_health_reminder,
        }

    def add(self, text, is_user, is_health_reminder=False):
        message = self._message(text, is_user, is_health_reminder)
        self._messages.append(message)
        self.store.set(HISTORY_KEY, self._messages)
        return message

    def messages(self):
        return list(self._messages)
