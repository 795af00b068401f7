from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class HashKind(str, Enum):
    SHA512 = "sha512"
    SHA256 = "sha256"
    MD5 = "md5"
    NOT_APPLICABLE = "not-applicable"  # locked or disabled (! / *)
    EXPIRED = "expired"  # 13 chars: legacy DES-length marker
    BLANK = "blank"
    UNKNOWN = "unknown"

    @property
    def has_password(self) -> bool:
        return self not in (HashKind.NOT_APPLICABLE, HashKind.BLANK)


class AccountRecord(BaseModel):
    """One host's view of one local account."""

    model_config = ConfigDict(extra="ignore")

    uid: int
    password: str = ""
    display_name: str = ""
    shell: str = ""
    last_login: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None
    hash_kind: Optional[HashKind] = None

    def record_login(self, when: datetime) -> bool:
        """Advance ``last_login`` to *when* if it is later. Returns True on change."""
        if self.last_login is None or when > self.last_login:
            self.last_login = when
            return True
        return False
