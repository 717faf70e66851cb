"""Configuration: frozen GuardConfig resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
import logging
import os

from dotenv import load_dotenv

from dontpanic.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DONTPANIC_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _coerce_bool(name: str, value: str) -> bool:
    """Convert an env string to boolean using common conventions."""
    v = value.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean, got {value!r}",
        hint="Use one of: 1/0, true/false, yes/no, on/off.",
    )


def _coerce_level(level: int | str) -> int:
    if isinstance(level, bool):
        raise ConfigurationError(f"log_level must be a level name or number, got {level!r}")
    if isinstance(level, int):
        if level < 0:
            raise ConfigurationError(f"log_level must be ≥ 0, got {level}")
        return level
    text = level.strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelNamesMapping().get(text.upper())
    if resolved is None:
        raise ConfigurationError(
            f"Unknown log level: {level!r}",
            hint="Use a standard level name such as DEBUG, INFO or WARNING.",
        )
    return resolved


@dataclass(frozen=True)
class GuardConfig:
    """Immutable settings for the fault interceptor.

    Example:
        config = GuardConfig(log_level="INFO")
        with recover(config=config) as caught:
            ...
    """

    #: Log every recovered fault through the ``dontpanic`` logger.
    log_recovered: bool = True
    #: Level name or number; normalized to an int.
    log_level: int | str = logging.DEBUG

    def __post_init__(self) -> None:
        """Normalize the log level and validate flags."""
        if not isinstance(self.log_recovered, bool):
            raise ConfigurationError(
                f"log_recovered must be a bool, got {type(self.log_recovered).__name__}"
            )
        object.__setattr__(self, "log_level", _coerce_level(self.log_level))

    @classmethod
    def from_env(cls) -> GuardConfig:
        """Build a config from ``DONTPANIC_*`` variables (``.env`` included)."""
        load_dotenv()
        kwargs: dict[str, object] = {}
        raw_flag = os.environ.get(f"{ENV_PREFIX}LOG_RECOVERED")
        if raw_flag is not None:
            kwargs["log_recovered"] = _coerce_bool(f"{ENV_PREFIX}LOG_RECOVERED", raw_flag)
        raw_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
        if raw_level is not None:
            kwargs["log_level"] = raw_level
        return cls(**kwargs)  # type: ignore[arg-type]


@cache
def default_config() -> GuardConfig:
    """Return the process-wide config, resolved from the environment once.

    An invalid environment falls back to the defaults with one warning.
    """
    try:
        return GuardConfig.from_env()
    except ConfigurationError as exc:
        logger.warning("Ignoring invalid %s* configuration, using defaults: %s", ENV_PREFIX, exc)
        return GuardConfig()
