"""Fleet host list sources and host-name helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from .errors import HostListError
from .primitives import iter_lines

logger = logging.getLogger(__name__)

_URL_SCHEMES = ("http://", "https://")


def _clean(lines: list[str]) -> list[str]:
    hosts = []
    for line in lines:
        name = line.split("#", 1)[0].strip()
        if name:
            hosts.append(name)
    return hosts


def load_hosts(source: str | list[str], *, timeout: float = 10.0) -> list[str]:
    """
    Return the ordered host list from *source*.

    *source* is an inline list, an http(s) URL whose body holds one host per
    line, or a path to a flat file of the same shape.  Duplicates are kept.
    """
    if isinstance(source, list):
        hosts = _clean([str(item) for item in source])
        origin = "inline list"
    elif source.startswith(_URL_SCHEMES):
        try:
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise HostListError(f"Unable to fetch host list from {source}: {exc}") from exc
        hosts = _clean(iter_lines(resp.text))
        origin = source
    else:
        path = Path(source).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise HostListError(f"Unable to open {path}: {exc}") from exc
        hosts = _clean(iter_lines(text))
        origin = str(path)
    logger.info("Read %d hostnames from %s", len(hosts), origin)
    return hosts


def short_name(fqdn: str, default_domain: str = "") -> str:
    """
    Collapse empty labels in *fqdn* and strip *default_domain* if it is the suffix.

    >>> short_name("foo.example.com", "example.com")
    'foo'
    >>> short_name("foo..example.com", "other.com")
    'foo.example.com'
    """
    name = ".".join(label for label in fqdn.split(".") if label)
    domain = default_domain.strip(".")
    if domain:
        suffix = "." + domain
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name
