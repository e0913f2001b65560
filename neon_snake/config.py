"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8765
    high_score_file: Optional[str] = None  # in-memory store when unset
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        seed = env.get("NEON_SNAKE_SEED")
        return cls(
            host=env.get("NEON_SNAKE_HOST", cls.host),
            port=int(env.get("NEON_SNAKE_PORT", cls.port)),
            high_score_file=env.get("NEON_SNAKE_HIGHSCORE_FILE") or None,
            seed=int(seed) if seed else None,
        )
