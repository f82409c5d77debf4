"""
SkillSync Application Configuration
Manages app branding, Gemini settings and chat limits
"""
import json
import logging
import os
from datetime import datetime

log = logging.getLogger("skillsync.config")


class AppConfig:
    """Configuration manager for SkillSync app settings"""
    CONFIG_FILE = "skillsync_config.json"

    DEFAULT_CONFIG = {
        "app_name": "SkillSync",
        "app_tagline": "Discover your tech career through quizzes, games and a friendly mentor",
        "gemini_model": "gemini-2.0-flash",
        "gemini_timeout_seconds": 20,
        "analysis_generation": {
            "temperature": 0.4,
            "top_k": 40,
            "top_p": 0.95,
            "max_output_tokens": 512,
        },
        "chat_generation": {
            "temperature": 0.8,
            "top_k": 40,
            "top_p": 0.95,
            "max_output_tokens": 200,
        },
        "chat_rate_limit": 20,
        "chat_rate_window_seconds": 60,
        "version": "1.0.0",
    }

    @classmethod
    def config_path(cls):
        return os.environ.get("SKILLSYNC_CONFIG", cls.CONFIG_FILE)

    @classmethod
    def load_config(cls):
        """Load configuration from file, falling back to defaults for missing keys"""
        config = json.loads(json.dumps(cls.DEFAULT_CONFIG))
        path = cls.config_path()
        if os.path.exists(path):
            try:
                with open(path, "r") as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    config.update(loaded)
                else:
                    log.warning(f"Ignoring config file {path}: expected a JSON object")
            except (OSError, ValueError) as e:
                log.warning(f"Ignoring unreadable config file {path}: {e}")
        return config

    @classmethod
    def gemini_api_key(cls):
        """Gemini credential from the environment; empty means not configured"""
        return os.environ.get("GEMINI_API_KEY", "").strip() or None

    @classmethod
    def get_cache_buster(cls):
        """Get a unique cache buster value"""
        return int(datetime.utcnow().timestamp())
