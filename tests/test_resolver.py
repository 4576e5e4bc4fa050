"""Tests for DirectoryResolver."""

from unittest.mock import MagicMock, patch

import pytest

from directory_servers.errors import UnresolvedNameError
from directory_servers.slack_server.resolver import DirectoryResolver

from conftest import CHANNELS, USERS


@pytest.fixture
def fetch_channels() -> MagicMock:
    return MagicMock(return_value=CHANNELS)


@pytest.fixture
def fetch_users() -> MagicMock:
    return MagicMock(return_value=USERS)


@pytest.fixture
def resolver(fetch_channels: MagicMock, fetch_users: MagicMock) -> DirectoryResolver:
    return DirectoryResolver(fetch_channels, fetch_users)


class TestChannelResolution:
    def test_single_channel_scenario(self) -> None:
        resolver = DirectoryResolver(lambda: [{"id": "C1", "name": "general"}], lambda: [])

        assert resolver.channel_id("general") == "C1"
        with pytest.raises(UnresolvedNameError) as exc_info:
            resolver.channel_id("random")
        assert exc_info.value.name == "random"
        assert exc_info.value.kind == "channel"

    def test_first_match_wins_on_duplicate_names(self, resolver: DirectoryResolver) -> None:
        assert resolver.channel_id("general") == "C1"

    def test_match_is_case_sensitive(self, resolver: DirectoryResolver) -> None:
        with pytest.raises(UnresolvedNameError):
            resolver.channel_id("General")

    @pytest.mark.parametrize("name", ["general", "random"])
    def test_id_then_name_round_trips(self, resolver: DirectoryResolver, name: str) -> None:
        assert resolver.channel_name(resolver.channel_id(name)) == name

    def test_unknown_id(self, resolver: DirectoryResolver) -> None:
        with pytest.raises(UnresolvedNameError):
            resolver.channel_name("C404")


class TestUserResolution:
    @pytest.mark.parametrize("name", ["alice", "Alice Liddell"])
    def test_matches_username_or_real_name(self, resolver: DirectoryResolver, name: str) -> None:
        assert resolver.user_id(name) == "U1"

    def test_matches_profile_real_name(self, resolver: DirectoryResolver) -> None:
        assert resolver.user_id("Carol Danvers") == "U3"
        assert resolver.user_ids(["Carol Danvers", "bob"]) == ["U3", "U2"]
        assert resolver.user_name(resolver.user_id("Carol Danvers")) == "Carol Danvers"

    @pytest.mark.parametrize(
        "name, real_name",
        [("bob", "Bob Builder"), ("Bob Builder", "Bob Builder"), ("carol", "Carol Danvers")],
    )
    def test_round_trip_yields_real_name(
        self, resolver: DirectoryResolver, name: str, real_name: str
    ) -> None:
        assert resolver.user_name(resolver.user_id(name)) == real_name

    def test_user_names_uses_one_fetch(
        self, resolver: DirectoryResolver, fetch_users: MagicMock
    ) -> None:
        assert resolver.user_names(["U2", "U1"]) == ["Bob Builder", "Alice Liddell"]
        fetch_users.assert_called_once()

    def test_user_ids_fails_on_unknown_name(self, resolver: DirectoryResolver) -> None:
        with pytest.raises(UnresolvedNameError) as exc_info:
            resolver.user_ids(["alice", "mallory"])
        assert exc_info.value.name == "mallory"


class TestCaching:
    def test_uncached_by_default(
        self, resolver: DirectoryResolver, fetch_channels: MagicMock
    ) -> None:
        resolver.channel_id("general")
        resolver.channel_id("random")

        assert fetch_channels.call_count == 2

    def test_ttl_cache_reuses_collection(
        self, fetch_channels: MagicMock, fetch_users: MagicMock
    ) -> None:
        resolver = DirectoryResolver(fetch_channels, fetch_users, cache_ttl=60)

        resolver.channel_id("general")
        resolver.channel_name("C2")

        fetch_channels.assert_called_once()

    def test_ttl_cache_expires(self, fetch_channels: MagicMock, fetch_users: MagicMock) -> None:
        resolver = DirectoryResolver(fetch_channels, fetch_users, cache_ttl=60)

        with patch("directory_servers.slack_server.resolver.time.monotonic", side_effect=[0, 61, 61]):
            resolver.channel_id("general")
            resolver.channel_id("general")

        assert fetch_channels.call_count == 2

    def test_invalidate_forces_refetch(
        self, fetch_channels: MagicMock, fetch_users: MagicMock
    ) -> None:
        resolver = DirectoryResolver(fetch_channels, fetch_users, cache_ttl=60)

        resolver.channel_id("general")
        resolver.invalidate()
        resolver.channel_id("general")

        assert fetch_channels.call_count == 2
