from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, Header, HTTPException, Query
from pydantic import BaseModel

from ..base_server import create_app
from .slack_utils import SlackClient

app = create_app("Slack Directory Server", "0.1.0")


@lru_cache(maxsize=32)
def client_for(token: str | None) -> SlackClient:
    """One client per token, so the directory cache outlives a single request."""
    return SlackClient(token=token)


def get_client(authorization: str | None = Header(default=None)) -> SlackClient:
    """Client for the caller's bearer token, falling back to SLACK_BOT_TOKEN."""
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer "):].strip()
    try:
        return client_for(token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc))


class ChannelTarget(BaseModel):
    channel_id: Optional[str] = None
    channel_name: Optional[str] = None


class CreateChannel(BaseModel):
    name: str


class RenameChannel(ChannelTarget):
    new_name: str


class Message(ChannelTarget):
    text: str


class AddMembers(ChannelTarget):
    user_ids: Optional[List[str]] = None
    user_names: Optional[List[str]] = None


class MemberTarget(ChannelTarget):
    user_id: Optional[str] = None
    user_name: Optional[str] = None


@app.get("/channels")
def channels(sl_client: SlackClient = Depends(get_client)):
    """List Slack channels visible to the token."""
    return sl_client.list_channels()


@app.post("/channels")
def create_channel(body: CreateChannel, sl_client: SlackClient = Depends(get_client)):
    return sl_client.create_channel(body.name)


@app.post("/channels/archive")
def archive_channel(body: ChannelTarget, sl_client: SlackClient = Depends(get_client)):
    return sl_client.archive_channel(**body.model_dump())


@app.post("/channels/rename")
def rename_channel(body: RenameChannel, sl_client: SlackClient = Depends(get_client)):
    return sl_client.rename_channel(**body.model_dump())


@app.post("/messages")
def send_message(body: Message, sl_client: SlackClient = Depends(get_client)):
    """Post a message to a channel given by id or name."""
    return sl_client.send_message(**body.model_dump())


@app.get("/channels/members")
def channel_members(
    channel_id: str | None = None,
    channel_name: str | None = None,
    return_names: bool = False,
    sl_client: SlackClient = Depends(get_client),
):
    return sl_client.list_channel_members(channel_id, channel_name, return_names=return_names)


@app.post("/channels/members")
def add_members(body: AddMembers, sl_client: SlackClient = Depends(get_client)):
    return sl_client.add_channel_members(**body.model_dump())


@app.post("/channels/members/remove")
def remove_member(body: MemberTarget, sl_client: SlackClient = Depends(get_client)):
    return sl_client.remove_channel_member(**body.model_dump())


@app.post("/channels/manager")
def set_manager(body: MemberTarget, sl_client: SlackClient = Depends(get_client)):
    """Vendor-extension call; stock Slack rejects it."""
    return sl_client.set_channel_manager(**body.model_dump())


@app.get("/users")
def users(sl_client: SlackClient = Depends(get_client)):
    return sl_client.list_users()


@app.get("/lookup/channel-id")
def channel_id(name: str = Query(...), sl_client: SlackClient = Depends(get_client)):
    return {"name": name, "id": sl_client.get_channel_id(name)}


@app.get("/lookup/channel-name")
def channel_name(id: str = Query(...), sl_client: SlackClient = Depends(get_client)):
    return {"id": id, "name": sl_client.get_channel_name(id)}


@app.get("/lookup/user-id")
def user_id(name: str = Query(...), sl_client: SlackClient = Depends(get_client)):
    return {"name": name, "id": sl_client.get_user_id(name)}


@app.get("/lookup/user-name")
def user_name(id: str = Query(...), sl_client: SlackClient = Depends(get_client)):
    return {"id": id, "real_name": sl_client.get_user_name(id)}
