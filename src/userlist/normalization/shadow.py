"""Parse ``/etc/shadow`` output: hash classification and password age."""

import logging
from typing import Any

from userlist.date_utils import days_to_datetime
from userlist.models.account import HashKind
from userlist.primitives import colon_fields, iter_lines
from userlist.store import IdentityStore

logger = logging.getLogger(__name__)

_HASH_PREFIXES = (
    ("$6$", HashKind.SHA512),
    ("$5$", HashKind.SHA256),
    ("$1$", HashKind.MD5),
    ("!", HashKind.NOT_APPLICABLE),
    ("*", HashKind.NOT_APPLICABLE),
)


def classify_hash(field: str) -> HashKind:
    for prefix, kind in _HASH_PREFIXES:
        if field.startswith(prefix):
            return kind
    if len(field) == 13:
        return HashKind.EXPIRED
    if not field:
        return HashKind.BLANK
    return HashKind.UNKNOWN


def parse_shadow(
    store: IdentityStore,
    hostname: str,
    raw: Any,
    *,
    logger: logging.Logger = logger,
) -> int:
    """Enrich existing records on *hostname*. Returns the number of records updated."""
    updated = 0
    for line in iter_lines(raw):
        fields = colon_fields(line)
        if len(fields) < 3:
            continue
        username = fields[0]
        record = store.get(hostname, username)
        # Accounts with unwanted shells were dropped during passwd parsing,
        # so unmatched shadow lines are expected.
        if record is None:
            continue

        record.hash_kind = classify_hash(fields[1])
        changed = days_to_datetime(fields[2])
        if changed is None:
            logger.warning(
                "host=%s, user=%s: unable to parse password change day count %r",
                hostname,
                username,
                fields[2],
            )
        else:
            record.password_changed_at = changed
        updated += 1
    return updated
