import json
import logging
import os


LOGGER = logging.getLogger(__name__)


class HighScoreStore:
    def __init__(self, path):
        self.path = path

    def load(self):
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return int(data["high_score"])
        except (OSError, ValueError, KeyError, TypeError) as exc:
            LOGGER.warning("ignoring unreadable high score file %s: %s", self.path, exc)
            return None

    def save(self, score):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(score)}, f, indent=2)
        except OSError as exc:
            LOGGER.warning("could not save high score to %s: %s", self.path, exc)
