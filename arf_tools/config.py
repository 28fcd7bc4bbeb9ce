"""
Configuration constants and settings for the arf.json tools.
"""

from dataclasses import dataclass
from pathlib import Path

# Input file, resolved against the working directory
ARF_PATH = Path("public") / "arf.json"

VALIDATOR_VERSION = "1.0.0"

# Link checker defaults
CONCURRENCY = 10
TIMEOUT_MS = 5000
PROGRESS_EVERY = 50
FOLLOW_REDIRECTS = False
MAX_REDIRECTS = 5

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class CheckerSettings:
    """
    Tunables for a link-check run.
    """
    concurrency: int = CONCURRENCY
    timeout_ms: int = TIMEOUT_MS
    follow_redirects: bool = FOLLOW_REDIRECTS
    user_agent: str = USER_AGENT
    progress_every: int = PROGRESS_EVERY

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.progress_every < 1:
            raise ValueError(f"progress_every must be at least 1, got {self.progress_every}")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0
