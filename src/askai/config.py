"""
Runtime settings for the ASK_AI function.

Values come from the environment.  A ``.env`` file in the working directory
(or any parent) is loaded first without overriding variables that are
already set:

  ASK_AI_TRANSPORT   "mock" (default) or "http"
  ASK_AI_ENDPOINT    URL the http transport POSTs requests to
  ASK_AI_API_KEY     bearer token sent with http requests
  ASK_AI_TIMEOUT     http timeout in seconds (default 30)
  ASK_AI_MOCK_DELAY  seconds the mock transport waits (default 1)
  ASK_AI_LOCALE      locale for function descriptions (default en-US)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

TRANSPORTS = ("mock", "http")


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    transport: str = "mock"
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    timeout: float = 30.0
    mock_delay: float = 1.0
    locale: str = "en-US"

    def __post_init__(self) -> None:
        if self.transport not in TRANSPORTS:
            raise ValueError(
                f"Unknown transport: {self.transport!r} (expected one of {', '.join(TRANSPORTS)})"
            )
        if self.transport == "http" and not self.endpoint:
            raise ValueError("ASK_AI_ENDPOINT is required for the http transport")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (defaults to ``os.environ`` after loading ``.env``)."""
        if env is None:
            load_dotenv(find_dotenv(usecwd=True))
            env = os.environ
        return cls(
            transport=(env.get("ASK_AI_TRANSPORT") or "mock").strip().lower(),
            endpoint=env.get("ASK_AI_ENDPOINT") or None,
            api_key=env.get("ASK_AI_API_KEY") or None,
            timeout=_float(env, "ASK_AI_TIMEOUT", 30.0),
            mock_delay=_float(env, "ASK_AI_MOCK_DELAY", 1.0),
            locale=env.get("ASK_AI_LOCALE") or "en-US",
        )
