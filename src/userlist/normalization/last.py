"""Parse ``last -aF`` login history into per-account last-login times."""

import logging
from typing import Any

from userlist.date_utils import parse_login_time
from userlist.primitives import iter_lines
from userlist.store import IdentityStore

logger = logging.getLogger(__name__)


def parse_last(
    store: IdentityStore,
    hostname: str,
    raw: Any,
    *,
    logger: logging.Logger = logger,
) -> int:
    """
    Apply each login event to the matching record on *hostname*.

    A line whose login time cannot be parsed is skipped with a warning.
    Returns the number of events that advanced a record's ``last_login``.
    """
    advanced = 0
    for line in iter_lines(raw):
        fields = line.split()
        if len(fields) < 2:
            continue
        username = fields[0]
        record = store.get(hostname, username)
        if record is None:
            continue
        # Search after the username so a login name can't match as a date token.
        when = parse_login_time(line.split(None, 1)[1])
        if when is None:
            logger.warning(
                "host=%s, user=%s: skipping login record with unparsable time: %r",
                hostname,
                username,
                line.strip(),
            )
            continue
        if record.record_login(when):
            advanced += 1
    return advanced
