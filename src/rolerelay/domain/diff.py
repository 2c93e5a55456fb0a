"""
Line differ.

Computes an order-preserving line diff between two text blocks. Built on
``difflib.SequenceMatcher`` with junk heuristics disabled so the result
depends only on the two inputs.
"""

from difflib import SequenceMatcher

from rolerelay.domain.models import DiffLine, LineTag


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping the empty segment left by a trailing newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def diff_lines(old_text: str, new_text: str) -> list[DiffLine]:
    """
    Diff two texts line by line.

    Joining the ADDED and UNCHANGED lines of the result reconstructs
    ``new_text``; joining the REMOVED and UNCHANGED lines reconstructs
    ``old_text`` (both modulo a trailing newline). A replaced block is
    emitted as its REMOVED lines followed by its ADDED lines.

    Args:
        old_text: Previous content
        new_text: New content

    Returns:
        Tagged lines in diff order
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    result: list[DiffLine] = []
    for opcode, i1, i2, j1, j2 in matcher.get_opcodes():
        if opcode == "equal":
            result.extend(DiffLine(LineTag.UNCHANGED, line) for line in new_lines[j1:j2])
            continue
        if opcode in ("delete", "replace"):
            result.extend(DiffLine(LineTag.REMOVED, line) for line in old_lines[i1:i2])
        if opcode in ("insert", "replace"):
            result.extend(DiffLine(LineTag.ADDED, line) for line in new_lines[j1:j2])
    return result
