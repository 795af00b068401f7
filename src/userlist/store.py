"""In-memory identity store: every account record seen across the fleet.

Records live in one flat table keyed by ``(host, username)``.  Alongside it
the store keeps three fleet-wide indexes, all insertion ordered:

* ``hosts``: host names in the order their first record arrived
* ``usernames``: every username, deduplicated, in first-seen order
* ``uid_map``: uid -> usernames observed under that uid, deduplicated per uid
"""

from __future__ import annotations

from collections.abc import Iterator

from .models.account import AccountRecord


class IdentityStore:
    def __init__(self) -> None:
        self.records: dict[tuple[str, str], AccountRecord] = {}
        self.hosts: list[str] = []
        self.usernames: list[str] = []
        self.uid_map: dict[int, list[str]] = {}
        self._seen_users: set[str] = set()
        self._seen_hosts: set[str] = set()

    # --- writes ---

    def add_host(self, host: str) -> None:
        if host not in self._seen_hosts:
            self._seen_hosts.add(host)
            self.hosts.append(host)

    def put(self, host: str, username: str, record: AccountRecord) -> None:
        """Insert or replace the record for (host, username) and index it."""
        self.add_host(host)
        self.records[(host, username)] = record
        if username not in self._seen_users:
            self._seen_users.add(username)
            self.usernames.append(username)
        names = self.uid_map.setdefault(record.uid, [])
        if username not in names:
            names.append(username)

    def merge(self, other: IdentityStore) -> None:
        """Fold *other* into this store as if its hosts had been parsed here.

        Each index is replayed in *other*'s own order, so merging per-host
        stores in host-list order reproduces a sequential run exactly.
        """
        for host in other.hosts:
            self.add_host(host)
        self.records.update(other.records)
        for username in other.usernames:
            if username not in self._seen_users:
                self._seen_users.add(username)
                self.usernames.append(username)
        for uid, names in other.uid_map.items():
            known = self.uid_map.setdefault(uid, [])
            known.extend(name for name in names if name not in known)

    # --- reads ---

    def get(self, host: str, username: str) -> AccountRecord | None:
        return self.records.get((host, username))

    def __contains__(self, key: object) -> bool:
        return key in self.records

    def __len__(self) -> int:
        return len(self.records)

    def host_records(self, host: str) -> Iterator[tuple[str, AccountRecord]]:
        """Yield (username, record) for *host* in fleet first-seen username order."""
        for username in self.usernames:
            record = self.records.get((host, username))
            if record is not None:
                yield username, record

    def display_name(self, username: str) -> str:
        """First non-empty display name for *username*, scanning hosts in insertion order."""
        for host in self.hosts:
            record = self.records.get((host, username))
            if record is not None and record.display_name:
                return record.display_name
        return ""
