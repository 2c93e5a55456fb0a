"""
Filesystem implementation of the session store.

Stores one JSON document per session. Each save replaces the document
atomically, so a crash mid-write leaves the previous state intact.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

from rolerelay.domain.exceptions import SessionNotFound
from rolerelay.domain.interfaces import SessionStoreInterface
from rolerelay.domain.models import (
    ArtifactRef,
    FragmentType,
    LineTag,
    MergedFile,
    Message,
    Phase,
    ProjectContext,
    Role,
    RoleArtifact,
    Usage,
)
from rolerelay.schemas import validate_session

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


class FilesystemSessionStore(SessionStoreInterface):
    """
    Persistent session repository.

    Layout: ``{base_dir}/{session_id}.json``. Documents are validated
    against ``session.schema.json`` on load.
    """

    def __init__(self, base_dir: str | Path):
        self._base_dir = Path(base_dir)
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def _session_path(self, session_id: str) -> Path:
        if not session_id or "/" in session_id or "\\" in session_id:
            raise ValueError(f"Invalid session id: {session_id!r}")
        return self._base_dir / f"{session_id}.json"

    def save(
        self,
        session_id: str,
        context: ProjectContext,
        messages: Sequence[Message],
    ) -> None:
        """Write the session using write-to-temp + rename."""
        data = {
            "version": FORMAT_VERSION,
            "session_id": session_id,
            "context": self._context_to_dict(context),
            "messages": [self._message_to_dict(m) for m in messages],
        }
        path = self._session_path(session_id)
        temp_path = path.with_suffix(".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        temp_path.replace(path)  # Atomic on POSIX
        logger.debug("Saved session %s (%d messages)", session_id, len(messages))

    def load(self, session_id: str) -> tuple[ProjectContext, tuple[Message, ...]]:
        """
        Load and validate a stored session.

        Raises:
            SessionNotFound: If no document exists for the id
            jsonschema.ValidationError: If the document is malformed
            MergeInvariantViolation: If a stored merged file is inconsistent
        """
        path = self._session_path(session_id)
        if not path.exists():
            raise SessionNotFound(session_id)

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        validate_session(data)

        context = self._dict_to_context(data["context"])
        messages = tuple(self._dict_to_message(m) for m in data["messages"])
        return context, messages

    def exists(self, session_id: str) -> bool:
        return self._session_path(session_id).exists()

    def list_sessions(self) -> list[str]:
        return sorted(path.stem for path in self._base_dir.glob("*.json"))

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def _context_to_dict(self, context: ProjectContext) -> dict[str, Any]:
        """Serialize context; artifacts become a list to keep role order."""
        return {
            "name": context.name,
            "summary": context.summary,
            "version": context.version,
            "artifacts": [
                {
                    "role": role.value,
                    "text": artifact.text,
                    "files": [
                        {
                            "path": path,
                            "lines": list(merged.lines),
                            "status": [tag.value for tag in merged.status],
                        }
                        for path, merged in artifact.files.items()
                    ],
                }
                for role, artifact in context.artifacts.items()
            ],
        }

    def _dict_to_context(self, data: dict[str, Any]) -> ProjectContext:
        artifacts = {}
        for entry in data["artifacts"]:
            files = {
                f["path"]: MergedFile(
                    lines=tuple(f["lines"]),
                    status=tuple(LineTag(tag) for tag in f["status"]),
                )
                for f in entry["files"]
            }
            artifacts[Role(entry["role"])] = RoleArtifact(
                text=entry["text"],
                files=MappingProxyType(files),
            )
        return ProjectContext(
            name=data["name"],
            summary=data["summary"],
            version=data["version"],
            artifacts=MappingProxyType(artifacts),
        )

    def _message_to_dict(self, message: Message) -> dict[str, Any]:
        artifact = None
        if message.artifact is not None:
            artifact = {
                "kind": message.artifact.kind.value,
                "title": message.artifact.title,
                "files": dict(message.artifact.files),
            }
        return {
            "message_id": message.message_id,
            "sequence": message.sequence,
            "role": message.role.value,
            "content": message.content,
            "phase": message.phase.value if message.phase else None,
            "artifact": artifact,
            "usage": {
                "input_tokens": message.usage.input_tokens,
                "output_tokens": message.usage.output_tokens,
            },
            "time_taken_seconds": message.time_taken_seconds,
            "model": message.model,
            "events": list(message.events),
            "created_at": message.created_at,
        }

    def _dict_to_message(self, data: dict[str, Any]) -> Message:
        artifact = None
        if data["artifact"] is not None:
            artifact = ArtifactRef(
                kind=FragmentType(data["artifact"]["kind"]),
                title=data["artifact"]["title"],
                files=MappingProxyType(dict(data["artifact"]["files"])),
            )
        return Message(
            message_id=data["message_id"],
            sequence=data["sequence"],
            role=Role(data["role"]),
            content=data["content"],
            phase=Phase(data["phase"]) if data["phase"] else None,
            artifact=artifact,
            usage=Usage(
                input_tokens=data["usage"]["input_tokens"],
                output_tokens=data["usage"]["output_tokens"],
            ),
            time_taken_seconds=data["time_taken_seconds"],
            model=data["model"],
            events=tuple(data["events"]),
            created_at=data["created_at"],
        )
