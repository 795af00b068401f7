"""Row builders and CSV writer for the three userlist reports.

All three files are headerless.  Column layouts:

* users:      host,user,uid,passwd,name,shell,lastlogin,pwhash,pwchanged
* collisions: uid,user1,user2,...
* uid map:    uid,user,displayName
"""

import csv
import logging
from pathlib import Path
from typing import Any

from .date_utils import format_date, format_last_login
from .models.account import AccountRecord
from .models.analysis import UidAnalysis
from .store import IdentityStore

logger = logging.getLogger(__name__)

USER_COLUMNS = ("host", "user", "uid", "passwd", "name", "shell", "lastlogin", "pwhash", "pwchanged")


def _format_value(value: Any) -> str:
    """Normalize a cell value for CSV output."""
    text = str(value) if value is not None else ""
    return text.replace("\n", " ").replace("\r", "")


def _has_password(record: AccountRecord) -> bool:
    return record.hash_kind is not None and record.hash_kind.has_password


def build_user_rows(
    store: IdentityStore,
    *,
    password_only: bool = False,
    logger: logging.Logger = logger,
) -> list[list[str]]:
    """One row per (host, user) record: hosts sorted, users in fleet first-seen order."""
    rows = []
    skipped = 0
    for host in sorted(store.hosts):
        for username, record in store.host_records(host):
            if password_only and not _has_password(record):
                skipped += 1
                continue
            rows.append(
                [
                    host,
                    username,
                    str(record.uid),
                    record.password,
                    record.display_name,
                    record.shell,
                    format_last_login(record.last_login),
                    record.hash_kind.value if record.hash_kind else "",
                    format_date(record.password_changed_at),
                ]
            )
    if skipped:
        logger.info("Password-only filter dropped %d account rows", skipped)
    return rows


def build_collision_rows(analysis: UidAnalysis) -> list[list[str]]:
    return [[str(c.uid), *c.usernames] for c in analysis.collisions]


def build_uid_map_rows(analysis: UidAnalysis) -> list[list[str]]:
    return [[str(r.uid), r.username, r.display_name] for r in analysis.resolved]


def export_csv(
    rows: list[list[Any]],
    output_path: str | Path,
    *,
    logger: logging.Logger = logger,
) -> None:
    """Write *rows* to *output_path*, creating parent directories.

    OSError propagates: a report that cannot be written ends the run.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        for row in rows:
            writer.writerow([_format_value(cell) for cell in row])
    logger.info("Wrote %d rows to %s", len(rows), path)
