from unittest.mock import MagicMock

import pytest

from directory_servers.slack_server.slack_utils import SlackClient

CHANNELS = [
    {"id": "C1", "name": "general", "is_archived": False},
    {"id": "C2", "name": "random", "is_archived": False},
    {"id": "C3", "name": "general", "is_archived": True},
]

USERS = [
    {"id": "U1", "name": "alice", "real_name": "Alice Liddell"},
    {"id": "U2", "name": "bob", "real_name": "Bob Builder"},
    {"id": "U3", "name": "carol", "profile": {"real_name": "Carol Danvers"}},
]


def slack_api(method, params=None, json=None):
    """Canned Slack Web API answers keyed by method name."""
    if method == "conversations.list":
        return {"ok": True, "channels": CHANNELS}
    if method == "users.list":
        return {"ok": True, "members": USERS}
    if method == "conversations.members":
        return {"ok": True, "members": ["U1", "U2"]}
    if method in ("conversations.create", "conversations.rename", "conversations.invite"):
        return {"ok": True, "channel": {"id": "C9", "name": (json or {}).get("name", "new")}}
    return {"ok": True}


@pytest.fixture
def mock_web_client() -> MagicMock:
    """Stand-in for slack_sdk.WebClient."""
    client = MagicMock()
    client.api_call.side_effect = slack_api
    return client


@pytest.fixture
def sl_client(mock_web_client: MagicMock) -> SlackClient:
    return SlackClient(token="xoxb-test", client=mock_web_client)


def calls_to(mock_web_client: MagicMock, method: str) -> list:
    return [c for c in mock_web_client.api_call.call_args_list if c.args[0] == method]
