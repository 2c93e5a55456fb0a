"""Click option groups shared by rolerelay commands."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click

DEFAULT_SESSION_DIR = ".rolerelay/sessions"

F = TypeVar("F", bound=Callable[..., Any])


def session_dir_option(func: F) -> F:
    """Decorator adding --session-dir."""

    @click.option(
        "--session-dir",
        default=DEFAULT_SESSION_DIR,
        show_default=True,
        type=click.Path(file_okay=False),
        help="Directory holding session JSON files",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def common_options(func: F) -> F:
    """
    Decorator adding the options of commands that run workers.

    Options added:
        --session-dir: Directory for session storage
        --tier: Model tier (HIGH or MID)
        --tdd/--no-tdd: Route through the tester
        --max-steps: Worker steps per run
        --base-url: OpenAI-compatible API URL
        --api-key: API key
        --prompts: Path to prompts.json
        --models: Path to models.json
        --log-file: Path to log file
        -v/--verbose: Enable verbose logging
    """

    @session_dir_option
    @click.option(
        "--tier",
        type=click.Choice(["HIGH", "MID"], case_sensitive=False),
        default="MID",
        show_default=True,
        help="Model quality tier for every worker in this run",
    )
    @click.option(
        "--tdd/--no-tdd",
        default=True,
        show_default=True,
        help="Write tests before code and loop implementer -> tester",
    )
    @click.option(
        "--max-steps",
        default=12,
        show_default=True,
        type=click.IntRange(min=1),
        help="Maximum worker steps per run",
    )
    @click.option(
        "--base-url",
        default=None,
        envvar="ROLERELAY_BASE_URL",
        help="OpenAI-compatible API URL (e.g. http://localhost:11434 for Ollama)",
    )
    @click.option(
        "--api-key",
        default=None,
        envvar="OPENAI_API_KEY",
        help="API key (default: $OPENAI_API_KEY)",
    )
    @click.option(
        "--prompts",
        default=None,
        type=click.Path(exists=True, dir_okay=False),
        help="Path to prompts.json with per-role overrides",
    )
    @click.option(
        "--models",
        default=None,
        type=click.Path(exists=True, dir_okay=False),
        help="Path to models.json with per-tier model identifiers",
    )
    @click.option(
        "--log-file",
        default=None,
        type=click.Path(dir_okay=False),
        help="Path to log file",
    )
    @click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Enable verbose (DEBUG) logging to console",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
