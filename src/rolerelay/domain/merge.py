"""
Context merge engine.

Folds a role's new file snapshot into its previously merged, line-tagged
representation. Each merge compares exactly two generations: the current
content reconstructed from the previous merge and the new snapshot.
"""

from collections.abc import Mapping
from types import MappingProxyType

from rolerelay.domain.diff import diff_lines, split_lines
from rolerelay.domain.models import LineTag, MergedFile, RoleArtifact


def merge_file(previous: MergedFile | None, new_content: str) -> MergedFile:
    """
    Merge a new snapshot of one file into its previous merged view.

    Args:
        previous: Merged view from the prior turn (None for a first snapshot)
        new_content: Full new content of the file

    Returns:
        Fresh merged view of previous-vs-new. With no previous view every
        line is ADDED.
    """
    if previous is None:
        lines = split_lines(new_content)
        return MergedFile(
            lines=tuple(lines),
            status=tuple(LineTag.ADDED for _ in lines),
        )

    diff = diff_lines(previous.current_text(), new_content)
    return MergedFile(
        lines=tuple(entry.line for entry in diff),
        status=tuple(entry.tag for entry in diff),
    )


def merge_artifact(
    previous: RoleArtifact | None,
    new_text: str,
    new_files: Mapping[str, str],
) -> RoleArtifact:
    """
    Merge a role's new output into its previous artifact.

    Every path present in either file map is merged: paths missing from
    ``new_files`` are merged against an empty snapshot (all REMOVED), new
    paths appear all ADDED. A path removed earlier stays as an empty file.

    Args:
        previous: The role's artifact from the prior turn, if any
        new_text: Latest free text from the role (replaces the old text)
        new_files: Latest ``{path: content}`` snapshot from the role

    Returns:
        The merged artifact
    """
    previous_files = previous.files if previous is not None else {}
    paths = list(previous_files)
    paths.extend(path for path in new_files if path not in previous_files)

    merged: dict[str, MergedFile] = {}
    for path in paths:
        prior = previous_files.get(path)
        merged[path] = merge_file(prior, new_files.get(path, ""))

    return RoleArtifact(text=new_text, files=MappingProxyType(merged))
