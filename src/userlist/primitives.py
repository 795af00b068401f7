"""Small coercion and text-splitting helpers shared by the record parsers."""

import re
from typing import Any

# ASCII digits only; no underscores, padding or non-ASCII digits.
_INT_RE = re.compile(r"[+-]?[0-9]+")


def to_int(value: Any) -> int | None:
    """Return *value* as an int, or None unless it is a plain decimal integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not _INT_RE.fullmatch(value):
        return None
    try:
        return int(value)
    except ValueError:
        # longer than sys.get_int_max_str_digits()
        return None


def iter_lines(raw: Any) -> list[str]:
    """Split raw command output into lines, dropping blank ones.

    Accepts text, bytes, or an already-split list (as ``stdout_lines``).
    """
    if raw is None:
        return []
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        lines = raw.splitlines()
    else:
        lines = [str(item or "") for item in raw]
    return [line for line in lines if line.strip()]


def colon_fields(line: str) -> list[str]:
    return line.rstrip("\r\n").split(":")


def path_basename(path: str) -> str:
    """Last ``/``-separated segment of *path* (``/sbin/nologin`` -> ``nologin``)."""
    return path.split("/")[-1]


def first_gecos_token(gecos: str) -> str:
    """The real-name part of a GECOS comment: everything before the first comma."""
    return gecos.split(",")[0]
