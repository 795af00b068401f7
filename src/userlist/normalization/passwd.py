"""Parse ``/etc/passwd`` output into account records."""

import logging
from typing import Any

from userlist.models.account import AccountRecord
from userlist.primitives import colon_fields, first_gecos_token, iter_lines, path_basename, to_int
from userlist.store import IdentityStore

logger = logging.getLogger(__name__)

UNWANTED_SHELLS = frozenset(("nologin", "false", "sync", "shutdown", "halt"))


def parse_passwd(
    store: IdentityStore,
    hostname: str,
    raw: Any,
    *,
    logger: logging.Logger = logger,
) -> int:
    """
    Create a record for every login-capable account in *raw*.

    This is the only parser that creates records; shadow and login-history
    parsing only enrich the accounts accepted here.  Returns the number of
    records written.
    """
    store.add_host(hostname)
    written = 0
    for line in iter_lines(raw):
        fields = colon_fields(line)
        # Too short to hold a shell
        if len(fields) < 7:
            continue
        username = fields[0]
        shell = fields[6]
        if path_basename(shell) in UNWANTED_SHELLS:
            logger.debug(
                "Skipping unwanted shell: host=%s, user=%s, shell=%s",
                hostname,
                username,
                shell,
            )
            continue
        uid = to_int(fields[2])
        if uid is None:
            logger.warning(
                "host=%s, user=%s: UID %r cannot be converted to integer",
                hostname,
                username,
                fields[2],
            )
            continue
        record = AccountRecord(
            uid=uid,
            password=fields[1],
            display_name=first_gecos_token(fields[4]),
            shell=shell,
        )
        store.put(hostname, username, record)
        written += 1
    return written
