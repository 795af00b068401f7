from .last import parse_last
from .passwd import UNWANTED_SHELLS, parse_passwd
from .shadow import classify_hash, parse_shadow

__all__ = [
    "UNWANTED_SHELLS",
    "classify_hash",
    "parse_last",
    "parse_passwd",
    "parse_shadow",
]
