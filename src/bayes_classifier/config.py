"""Runtime settings read from the environment and an optional ``.env`` file."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL_PATH = "model.json"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Settings for the command-line wrapper.

    Attributes:
        model_path: Where the serialized model is read from and saved to.
        log_level: Name of the root logging level.
    """

    model_path: str = DEFAULT_MODEL_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(dotenv_path: str | None = None) -> Settings:
    """Load settings from ``BAYES_*`` environment variables.

    Variables already set in the environment win over the ``.env`` file.

    Args:
        dotenv_path: Optional explicit ``.env`` location.

    Returns:
        Populated Settings.
    """
    load_dotenv(dotenv_path)

    return Settings(
        model_path=os.getenv("BAYES_MODEL_PATH") or DEFAULT_MODEL_PATH,
        log_level=(os.getenv("BAYES_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
