"""
rolerelay command line.

Usage:
    rolerelay run "Build a slugify library" --session-id demo
    rolerelay resume demo
    rolerelay show demo --role implementer
    rolerelay usage demo
    rolerelay sessions
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
import jsonschema

from rolerelay.application.assembler import assemble
from rolerelay.application.orchestrator import Orchestrator, OrchestratorConfig
from rolerelay.application.session import ProjectSession
from rolerelay.cli.config import (
    ConfigurationError,
    load_model_map,
    load_prompts,
    normalize_base_url,
)
from rolerelay.cli.console import (
    console,
    print_chain_result,
    print_context,
    print_error,
    print_sessions,
    print_usage,
)
from rolerelay.cli.logging_setup import setup_logging
from rolerelay.cli.options import common_options, session_dir_option
from rolerelay.domain.exceptions import MergeInvariantViolation, SessionNotFound
from rolerelay.domain.models import ModelTier, Role, Usage
from rolerelay.infrastructure.llm import WorkerSettings, build_workers
from rolerelay.infrastructure.model_mapper import DEFAULT_MODEL_MAP
from rolerelay.infrastructure.persistence import FilesystemSessionStore

logger = logging.getLogger("rolerelay.cli")


def _open_session(
    session_id: str,
    session_dir: str,
    tdd: bool,
    max_steps: int,
    base_url: str | None,
    api_key: str | None,
    prompts: str | None,
    models: str | None,
    must_exist: bool = False,
) -> ProjectSession:
    """Wire workers, orchestrator and store into a session."""
    settings = WorkerSettings(
        base_url=normalize_base_url(base_url) if base_url else None,
        api_key=api_key,
    )
    workers = build_workers(
        settings=settings,
        prompts=load_prompts(Path(prompts)) if prompts else None,
    )
    model_map = load_model_map(Path(models)) if models else DEFAULT_MODEL_MAP
    orchestrator = Orchestrator(
        workers,
        model_for=model_map.model_for,
        config=OrchestratorConfig(test_driven=tdd, max_steps=max_steps),
    )

    store = FilesystemSessionStore(session_dir)
    if must_exist or store.exists(session_id):
        return ProjectSession.load(session_id, orchestrator, store)
    return ProjectSession(session_id, orchestrator, store)


@contextmanager
def _session_errors(session_id: str) -> Iterator[None]:
    """Turn session loading failures into a printed error and exit code 1."""
    try:
        yield
    except SessionNotFound as e:
        print_error(f"Session not found: {session_id}", hint="rolerelay sessions")
        raise SystemExit(1) from e
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(1) from e
    except jsonschema.ValidationError as e:
        print_error(f"Stored session {session_id} is corrupt: {e.message}")
        raise SystemExit(1) from e
    except MergeInvariantViolation as e:
        print_error(f"Stored session {session_id} is corrupt: {e}")
        raise SystemExit(1) from e
    except ValueError as e:
        # Invalid session id
        print_error(str(e))
        raise SystemExit(1) from e


@click.group()
@click.version_option(package_name="rolerelay")
def main() -> None:
    """Route a software request through manager, analyst, architect,
    tester, implementer, reviewer and deployer workers."""


@main.command()
@click.argument("prompt")
@click.option(
    "--session-id",
    default=None,
    help="Existing session to continue (default: start a new one)",
)
@common_options
def run(
    prompt: str,
    session_id: str | None,
    session_dir: str,
    tier: str,
    tdd: bool,
    max_steps: int,
    base_url: str | None,
    api_key: str | None,
    prompts: str | None,
    models: str | None,
    log_file: str | None,
    verbose: bool,
) -> None:
    """Submit PROMPT to a session and run the worker chain."""
    setup_logging(log_file=log_file, verbose=verbose)
    session_id = session_id or uuid.uuid4().hex[:12]

    with _session_errors(session_id):
        session = _open_session(
            session_id, session_dir, tdd, max_steps, base_url, api_key, prompts, models
        )
    console.print(f"[bold]Session[/bold] {session.session_id}")
    result = asyncio.run(session.submit(prompt, ModelTier(tier.upper())))
    print_chain_result(result)


@main.command()
@click.argument("session_id")
@common_options
def resume(
    session_id: str,
    session_dir: str,
    tier: str,
    tdd: bool,
    max_steps: int,
    base_url: str | None,
    api_key: str | None,
    prompts: str | None,
    models: str | None,
    log_file: str | None,
    verbose: bool,
) -> None:
    """Re-enter the chain of SESSION_ID from its last message."""
    setup_logging(log_file=log_file, verbose=verbose)

    with _session_errors(session_id):
        session = _open_session(
            session_id,
            session_dir,
            tdd,
            max_steps,
            base_url,
            api_key,
            prompts,
            models,
            must_exist=True,
        )
    result = asyncio.run(session.resume(ModelTier(tier.upper())))
    print_chain_result(result)


@main.command()
@click.argument("session_id")
@click.option(
    "--role",
    "roles",
    multiple=True,
    type=click.Choice([role.value for role in Role]),
    help="Only show blocks of these roles (repeatable)",
)
@session_dir_option
def show(session_id: str, roles: tuple[str, ...], session_dir: str) -> None:
    """Print the assembled context of SESSION_ID."""
    with _session_errors(session_id):
        context, _ = FilesystemSessionStore(session_dir).load(session_id)

    role_filter = {Role(value) for value in roles} if roles else None
    print_context(assemble(context, role_filter))


@main.command()
@click.argument("session_id")
@session_dir_option
def usage(session_id: str, session_dir: str) -> None:
    """Print token usage and time per role for SESSION_ID."""
    with _session_errors(session_id):
        _, messages = FilesystemSessionStore(session_dir).load(session_id)

    totals: dict[Role, Usage] = {}
    seconds: dict[Role, float] = {}
    for message in messages:
        if message.role is Role.USER:
            continue
        totals[message.role] = totals.get(message.role, Usage()) + message.usage
        seconds[message.role] = (
            seconds.get(message.role, 0.0) + message.time_taken_seconds
        )
    print_usage(totals, seconds)


@main.command()
@session_dir_option
def sessions(session_dir: str) -> None:
    """List stored sessions."""
    print_sessions(FilesystemSessionStore(session_dir).list_sessions())
