"""Pool of plausible engineering commit summaries."""

import random
from typing import Tuple

COMMIT_MESSAGES: Tuple[str, ...] = (
    "Refactor authentication module",
    "Add comprehensive unit tests",
    "Optimize database queries",
    "Fix memory leak in parser",
    "Implement rate limiting middleware",
    "Update API documentation",
    "Add input validation layer",
    "Improve error handling",
    "Optimize build pipeline",
    "Add monitoring metrics",
    "Implement caching strategy",
    "Fix cross-platform compatibility",
    "Add security headers",
    "Optimize image compression",
    "Implement async processing",
    "Add logging framework",
    "Fix race condition bug",
    "Update dependency versions",
    "Add feature toggles",
    "Implement data migration",
    "Add integration tests",
    "Fix CSS responsiveness",
    "Optimize network requests",
    "Add encryption support",
)


def choose_message(rng: random.Random) -> str:
    return rng.choice(COMMIT_MESSAGES)
