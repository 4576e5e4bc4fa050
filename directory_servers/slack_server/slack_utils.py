from typing import Dict, List, Optional
import logging

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web import SlackResponse

from .. import config
from ..errors import RemoteRejectedError, TransportError
from .resolver import DirectoryResolver
from .targets import pick_target

logger = logging.getLogger(__name__)


class SlackClient:
    """Wrapper around Slack conversations.*, chat.* and users.* endpoints.

    Every channel or user argument comes in an id form and a name form;
    exactly one of the two must be given. Names are resolved through
    ``self.directory`` before the single outbound call is made.
    """

    def __init__(
        self,
        token: str | None = None,
        timeout: float | None = None,
        cache_ttl: float | None = None,
        manager_method: str | None = None,
        client: WebClient | None = None,
    ):
        self.token = token or config.SLACK_BOT_TOKEN
        if self.token is None:
            raise ValueError("SLACK_BOT_TOKEN env var not set.")
        self.manager_method = manager_method or config.SLACK_SET_MANAGER_METHOD
        # No retry handlers: a failed call is reported, never replayed
        self.client = client or WebClient(
            token=self.token,
            base_url=config.SLACK_BASE_URL,
            timeout=timeout or config.SLACK_TIMEOUT,
            logger=logger,
            retry_handlers=[],
        )
        self.directory = DirectoryResolver(
            self.list_channels,
            self.list_users,
            cache_ttl=cache_ttl if cache_ttl is not None else config.SLACK_DIRECTORY_CACHE_TTL,
        )

    def _call(self, method: str, body: Dict | None = None, params: Dict | None = None) -> Dict:
        """Issue one Web API call; bodies go out as JSON, reads as form params."""
        logger.debug("Calling %s", method)
        try:
            if body is not None:
                response = self.client.api_call(method, json=body)
            else:
                response = self.client.api_call(method, params=params)
        except SlackApiError as exc:
            error = _error_code(exc.response)
            if error is None:
                # HTTP failure without a Slack envelope, e.g. an HTML 5xx page
                raise TransportError(method, exc) from exc
            logger.warning("%s rejected by Slack: %s", method, error)
            raise RemoteRejectedError(method, error) from exc
        except (SlackClientError, OSError) as exc:
            raise TransportError(method, exc) from exc
        return response.data if isinstance(response, SlackResponse) else response

    def _channel(self, channel_id: str | None, channel_name: str | None) -> str:
        channel_id, channel_name = pick_target("channel", channel_id, channel_name)
        return channel_id or self.directory.channel_id(channel_name)

    def _user(self, user_id: str | None, user_name: str | None) -> str:
        user_id, user_name = pick_target("user", user_id, user_name)
        return user_id or self.directory.user_id(user_name)

    # Listings

    def list_channels(self) -> List[Dict]:
        response = self._call("conversations.list", params={"types": "public_channel,private_channel"})
        return response.get("channels", [])

    def list_users(self) -> List[Dict]:
        return self._call("users.list", params={}).get("members", [])

    def list_channel_members(
        self,
        channel_id: str | None = None,
        channel_name: str | None = None,
        return_names: bool = False,
    ) -> List[str]:
        """Member ids of a channel, or their real names when ``return_names`` is set."""
        channel = self._channel(channel_id, channel_name)
        members = self._call("conversations.members", params={"channel": channel}).get("members", [])
        if return_names:
            return self.directory.user_names(members)
        return members

    # Channel lifecycle

    def create_channel(self, name: str) -> Dict:
        return self._call("conversations.create", {"name": name}).get("channel", {})

    def archive_channel(self, channel_id: str | None = None, channel_name: str | None = None) -> Dict:
        channel = self._channel(channel_id, channel_name)
        return self._call("conversations.archive", {"channel": channel})

    def rename_channel(
        self,
        new_name: str,
        channel_id: str | None = None,
        channel_name: str | None = None,
    ) -> Dict:
        channel = self._channel(channel_id, channel_name)
        response = self._call("conversations.rename", {"channel": channel, "name": new_name})
        return response.get("channel", {})

    # Messaging

    def send_message(
        self,
        text: str,
        channel_id: str | None = None,
        channel_name: str | None = None,
    ) -> Dict:
        channel = self._channel(channel_id, channel_name)
        return self._call("chat.postMessage", {"channel": channel, "text": text})

    # Membership

    def add_channel_members(
        self,
        channel_id: str | None = None,
        channel_name: str | None = None,
        user_ids: Optional[List[str]] = None,
        user_names: Optional[List[str]] = None,
    ) -> Dict:
        """Invite a batch of users in one call.

        Every name is resolved before anything is sent, so a single unknown
        name fails the whole batch without inviting anyone.
        """
        channel = self._channel(channel_id, channel_name)
        user_ids, user_names = pick_target("user", user_ids, user_names)
        users = user_ids or self.directory.user_ids(user_names)
        response = self._call("conversations.invite", {"channel": channel, "users": ",".join(users)})
        return response.get("channel", {})

    def remove_channel_member(
        self,
        channel_id: str | None = None,
        channel_name: str | None = None,
        user_id: str | None = None,
        user_name: str | None = None,
    ) -> Dict:
        channel = self._channel(channel_id, channel_name)
        user = self._user(user_id, user_name)
        return self._call("conversations.kick", {"channel": channel, "user": user})

    def set_channel_manager(
        self,
        channel_id: str | None = None,
        channel_name: str | None = None,
        user_id: str | None = None,
        user_name: str | None = None,
    ) -> Dict:
        """Call the configured vendor-extension method for channel managers.

        Stock Slack workspaces have no such method and answer with
        ``unknown_method``, which surfaces as ``RemoteRejectedError``.
        """
        channel = self._channel(channel_id, channel_name)
        user = self._user(user_id, user_name)
        return self._call(self.manager_method, {"channel": channel, "user": user})

    # Directory lookups

    def get_channel_id(self, channel_name: str) -> str:
        return self.directory.channel_id(channel_name)

    def get_channel_name(self, channel_id: str) -> str:
        return self.directory.channel_name(channel_id)

    def get_user_id(self, user_name: str) -> str:
        return self.directory.user_id(user_name)

    def get_user_name(self, user_id: str) -> str:
        return self.directory.user_name(user_id)


def _error_code(response) -> str | None:
    """Slack's ``error`` code, or None when the reply was not a Slack envelope."""
    data = response.data if isinstance(response, SlackResponse) else response
    if isinstance(data, dict):
        return data.get("error")
    return None
