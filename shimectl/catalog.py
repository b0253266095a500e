"""Naming rules and user-facing messages for the installed mascot catalogue."""

from __future__ import annotations

from typing import NamedTuple, Optional, Sequence

__all__ = [
    "MASCOT_SUFFIX",
    "DELETE_PROMPT_LIMIT",
    "ImportSummary",
    "breed_template_name",
    "mascot_name_from_folder",
    "delete_prompt",
    "import_summary",
]

MASCOT_SUFFIX = ".mascot"
"""Suffix of every folder that holds an installed mascot."""

DELETE_PROMPT_LIMIT = 5
"""Number of names listed one by one in the delete confirmation."""

_DELETE_QUESTION = "Are you sure you want to delete these shimeji?"
_IMPORT_FAILED = "Could not import any mascots from the specified archive(s)."


class ImportSummary(NamedTuple):
    """Outcome of an import, as shown to the user."""

    message: str
    success: bool


def breed_template_name(name: str, fallback: str) -> str:
    """Name of the template a breed request should spawn.

    An empty ``name`` means the parent's own template (``fallback``).
    Only the last path component counts, with both ``\\`` and ``/``
    accepted as separators.
    """
    if name == "":
        name = fallback
    name = name[name.rfind("\\") + 1:]
    name = name[name.rfind("/") + 1:]
    return name


def mascot_name_from_folder(folder_name: str) -> Optional[str]:
    """Mascot name for a folder called ``<name>.mascot``, or ``None``.

    Folders without the suffix, or with nothing in front of it, do not
    hold a mascot.
    """
    if not folder_name.endswith(MASCOT_SUFFIX) or len(folder_name) <= len(MASCOT_SUFFIX):
        return None
    return folder_name[: -len(MASCOT_SUFFIX)]


def delete_prompt(names: Sequence[str]) -> str:
    """Confirmation text asking whether the given mascots should be deleted.

    At most five names are listed; the rest are counted.
    """
    if not names:
        raise ValueError("no mascots to delete")
    lines = [_DELETE_QUESTION]
    lines.extend(f"* {name}" for name in names[:DELETE_PROMPT_LIMIT])
    hidden = len(names) - DELETE_PROMPT_LIMIT
    if hidden > 0:
        lines.append(f"... and {hidden} other(s)")
    return "\n".join(lines)


def import_summary(count: int) -> ImportSummary:
    """Message reporting how many mascots an import produced."""
    if count < 0:
        raise ValueError(f"mascot count cannot be negative, got {count!r}")
    if count == 0:
        return ImportSummary(_IMPORT_FAILED, False)
    plural = "" if count == 1 else "s"
    return ImportSummary(f"Imported {count} mascot{plural}.", True)