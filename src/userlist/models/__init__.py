from .account import AccountRecord, HashKind
from .analysis import ResolvedUid, UidAnalysis, UidCollision
from .config import UserlistConfig

__all__ = [
    "AccountRecord",
    "HashKind",
    "ResolvedUid",
    "UidAnalysis",
    "UidCollision",
    "UserlistConfig",
]
