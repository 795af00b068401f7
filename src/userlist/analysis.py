"""UID consistency analysis over a completed identity store."""

import logging

from .models.analysis import ResolvedUid, UidAnalysis, UidCollision
from .store import IdentityStore

logger = logging.getLogger(__name__)


def analyze_uids(store: IdentityStore, *, logger: logging.Logger = logger) -> UidAnalysis:
    """
    Classify every uid in the store, ascending.

    A uid held by exactly one username across the fleet is resolved and gets
    that user's best-known display name.  A uid held by two or more distinct
    usernames is a collision; its names are kept in first-observed order and
    left for a human to sort out.
    """
    analysis = UidAnalysis()
    for uid in sorted(store.uid_map):
        names = store.uid_map[uid]
        if len(names) == 1:
            username = names[0]
            analysis.resolved.append(
                ResolvedUid(uid=uid, username=username, display_name=store.display_name(username))
            )
        elif names:
            logger.info("UID collision: uid=%d, users=%s", uid, ",".join(names))
            analysis.collisions.append(UidCollision(uid=uid, usernames=list(names)))
    logger.debug(
        "Analyzed %d uids: %d resolved, %d collisions",
        len(store.uid_map),
        len(analysis.resolved),
        len(analysis.collisions),
    )
    return analysis
