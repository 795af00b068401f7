"""Per-host collection and the fleet loop that merges host results."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .errors import RemoteError
from .hosts import short_name
from .normalization import parse_last, parse_passwd, parse_shadow
from .store import IdentityStore

logger = logging.getLogger(__name__)

PASSWD_COMMAND = "cat /etc/passwd"
SHADOW_COMMAND = "sudo cat /etc/shadow"
LAST_COMMAND = "last -aF"


class HostSessionLike(Protocol):
    def run(self, command: str) -> str: ...


class CommandRunner(Protocol):
    def session(self, hostname: str) -> AbstractContextManager[HostSessionLike]: ...


class HostStatus(str, Enum):
    PARSED = "parsed"
    PARTIAL = "partial"  # passwd read, shadow or last missing
    FAILED = "failed"


@dataclass
class HostResult:
    hostname: str
    short_name: str
    status: HostStatus
    store: IdentityStore
    seconds: float = 0.0
    errors: list[str] = field(default_factory=list)


@dataclass
class CollectionSummary:
    hosts: list[HostResult] = field(default_factory=list)
    seconds: float = 0.0

    @property
    def parsed(self) -> int:
        return sum(1 for h in self.hosts if h.status is not HostStatus.FAILED)

    @property
    def failed(self) -> list[str]:
        return [h.hostname for h in self.hosts if h.status is HostStatus.FAILED]


def collect_host(
    hostname: str,
    runner: CommandRunner,
    *,
    default_domain: str = "",
    logger: logging.Logger = logger,
) -> HostResult:
    """
    Run the three account commands on *hostname* into a fresh store slice.

    Connection, authentication and passwd failures mark the host failed and
    leave its slice empty.  Shadow and last failures leave it partial.
    """
    key = short_name(hostname, default_domain)
    store = IdentityStore()
    result = HostResult(hostname=hostname, short_name=key, status=HostStatus.PARSED, store=store)
    t0 = time.monotonic()
    try:
        with runner.session(hostname) as session:
            passwd = session.run(PASSWD_COMMAND)
            parse_passwd(store, key, passwd, logger=logger)
            for command, parser in ((SHADOW_COMMAND, parse_shadow), (LAST_COMMAND, parse_last)):
                try:
                    output = session.run(command)
                except RemoteError as exc:
                    logger.warning("%s", exc)
                    result.errors.append(str(exc))
                    result.status = HostStatus.PARTIAL
                    continue
                parser(store, key, output, logger=logger)
    except RemoteError as exc:
        logger.warning("%s", exc)
        result.errors.append(str(exc))
        result.status = HostStatus.FAILED
        result.store = IdentityStore()
    result.seconds = time.monotonic() - t0
    if result.status is not HostStatus.FAILED:
        logger.info("%s: Parsed in %.2f seconds", key, result.seconds)
    return result


def collect_fleet(
    hostnames: list[str],
    runner: CommandRunner,
    *,
    default_domain: str = "",
    workers: int = 1,
    logger: logging.Logger = logger,
) -> tuple[IdentityStore, CollectionSummary]:
    """
    Collect every host and merge the slices in host-list order.

    With ``workers > 1`` hosts run in a thread pool; the merge only starts
    once every host has finished, so the output matches a sequential run.
    """
    t0 = time.monotonic()
    if workers > 1 and len(hostnames) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(hostnames))) as pool:
            futures = [
                pool.submit(collect_host, h, runner, default_domain=default_domain, logger=logger)
                for h in hostnames
            ]
            results = [f.result() for f in futures]
    else:
        results = [
            collect_host(h, runner, default_domain=default_domain, logger=logger) for h in hostnames
        ]

    store = IdentityStore()
    for result in results:
        store.merge(result.store)

    summary = CollectionSummary(hosts=results, seconds=time.monotonic() - t0)
    logger.info(
        "Successfully parsed %d hosts out of %d in %.1f seconds",
        summary.parsed,
        len(hostnames),
        summary.seconds,
    )
    return store, summary
