"""Name <-> id resolution against Slack's channel and user listings.

Slack has no lookup-by-name endpoint, so every resolution lists the whole
collection and scans it. Matching is exact and case-sensitive; when several
entries match, the first one in the order Slack returned them wins.
"""

import logging
import time
from typing import Callable, Dict, Iterable, List

from ..errors import UnresolvedNameError

logger = logging.getLogger(__name__)

Fetcher = Callable[[], List[Dict]]


class DirectoryResolver:
    """Resolve channel and user names to ids and back.

    With ``cache_ttl=None`` (the default) every call refetches, so results
    always reflect current server state. A positive ``cache_ttl`` keeps each
    fetched collection for that many seconds.
    """

    def __init__(
        self,
        fetch_channels: Fetcher,
        fetch_users: Fetcher,
        cache_ttl: float | None = None,
    ):
        self._fetchers = {"channel": fetch_channels, "user": fetch_users}
        self.cache_ttl = cache_ttl
        self._cache: Dict[str, tuple[float, List[Dict]]] = {}

    def invalidate(self) -> None:
        self._cache.clear()

    def _collection(self, kind: str) -> List[Dict]:
        if self.cache_ttl:
            cached = self._cache.get(kind)
            if cached is not None and time.monotonic() - cached[0] < self.cache_ttl:
                return cached[1]
        items = self._fetchers[kind]()
        if self.cache_ttl:
            self._cache[kind] = (time.monotonic(), items)
        return items

    def channel_id(self, name: str) -> str:
        for channel in self._collection("channel"):
            if channel.get("name") == name:
                logger.debug("Resolved channel %s -> %s", name, channel["id"])
                return channel["id"]
        raise UnresolvedNameError("channel", name)

    def channel_name(self, channel_id: str) -> str:
        for channel in self._collection("channel"):
            if channel.get("id") == channel_id:
                return channel["name"]
        raise UnresolvedNameError("channel", channel_id)

    def user_id(self, name: str) -> str:
        """Match ``name`` against either the username or the real name."""
        for user in self._collection("user"):
            if name in (user.get("name"), _real_name(user)):
                logger.debug("Resolved user %s -> %s", name, user["id"])
                return user["id"]
        raise UnresolvedNameError("user", name)

    def user_name(self, user_id: str) -> str:
        return self.user_names([user_id])[0]

    def user_names(self, user_ids: Iterable[str]) -> List[str]:
        """Real names for ``user_ids``, all looked up in a single users fetch."""
        by_id = {}
        for user in self._collection("user"):
            by_id.setdefault(user.get("id"), user)
        names = []
        for user_id in user_ids:
            user = by_id.get(user_id)
            if user is None:
                raise UnresolvedNameError("user", user_id)
            names.append(_real_name(user))
        return names

    def user_ids(self, names: Iterable[str]) -> List[str]:
        """Ids for every name in ``names``; fails on the first unknown one."""
        users = self._collection("user")
        ids = []
        for name in names:
            match = next((u for u in users if name in (u.get("name"), _real_name(u))), None)
            if match is None:
                raise UnresolvedNameError("user", name)
            ids.append(match["id"])
        return ids


def _real_name(user: Dict) -> str:
    # Bots and some deactivated accounts carry no top-level real_name
    return user.get("real_name") or user.get("profile", {}).get("real_name") or user["name"]
