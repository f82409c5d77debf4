"""
Wellness reminders for long study sessions.

Each reminder kind fires once its interval has elapsed since it last fired.
Last-fired timestamps live in the session's key-value store so reminders
resume correctly across page reloads.
"""
import logging
import time

log = logging.getLogger("skillsync.wellness")

TIMERS_KEY = "grewt-health-timers"

HEALTH_REMINDERS = [
    {
        "type": "water",
        "message": "💧 Time for a water break! Stay hydrated while you code! Your brain needs water to function at its best.",
        "icon": "💧",
        "interval": 60 * 60,
    },
    {
        "type": "eyes",
        "message": "👀 Give your eyes a 20-second break! Look at something 20 feet away. Your vision is precious!",
        "icon": "👀",
        "interval": 20 * 60,
    },
    {
        "type": "posture",
        "message": "🪑 Check your posture! Sit up straight, shoulders back. Your future self will thank you!",
        "icon": "🪑",
        "interval": 30 * 60,
    },
    {
        "type": "break",
        "message": "🚶 Time for a 5-minute walk! Movement boosts creativity and reduces stress. Go stretch those legs!",
        "icon": "🚶",
        "interval": 90 * 60,
    },
    {
        "type": "mental",
        "message": "🧘 Take a deep breath! Remember: you're doing great, progress isn't always linear, "
                   "and it's okay to take breaks. You've got this! 💪",
        "icon": "🧘",
        "interval": 2 * 60 * 60,
    },
]

# How often clients are expected to poll /api/wellness/check
CHECK_INTERVAL_SECONDS = 60


class WellnessScheduler:
    def __init__(self, store, clock=None, reminders=HEALTH_REMINDERS):
        self.store = store
        self.clock = clock or time.time
        self.reminders = reminders

        saved = store.get(TIMERS_KEY) or {}
        now = self.clock()
        self.timers = {r["type"]: saved.get(r["type"], now) for r in reminders}
        if self.timers != saved:
            store.set(TIMERS_KEY, self.timers)

    def due(self):
        """Reminders whose interval has elapsed; marks them fired"""
        now = self.clock()
        fired = []
        for reminder in self.reminders:
            if now - self.timers[reminder["type"]] >= reminder["interval"]:
                fired.append(reminder)
                self.timers[reminder["type"]] = now

        if fired:
            self.store.set(TIMERS_KEY, self.timers)
            log.info(f"Wellness reminders fired: {', '.join(r['type'] for r in fired)}")
        return fired

    def next_due_in(self):
        now = self.clock()
        return {
            r["type"]: max(0, int(self.timers[r["type"]] + r["interval"] - now))
            for r in self.reminders
        }

    def trigger(self, kind):
        """Fire one reminder now and restart its interval"""
        for reminder in self.reminders:
            if reminder["type"] == kind:
                self.timers[kind] = self.clock()
                self.store.set(TIMERS_KEY, self.timers)
                log.info(f"Wellness reminder triggered manually: {kind}")
                return reminder
        raise ValueError(f"Unknown reminder type: {kind!r}")
