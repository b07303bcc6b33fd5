"""Tests for rankings and leaderboard panel reconciliation."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from conftest import GUILD_ID
from database.store import Database
from systems.leaderboard_system import LeaderboardSystem
from utils.exceptions import ExternalCallFailure, NotFoundError

CHANNEL_ID = 700


def http_error(cls, status, reason, text):
    return cls(MagicMock(status=status, reason=reason), text)


@pytest.fixture
def channel():
    channel = MagicMock()
    channel.panel = MagicMock()
    channel.panel.edit = AsyncMock()
    channel.fetch_message = AsyncMock(return_value=channel.panel)
    channel.send = AsyncMock(return_value=SimpleNamespace(id=900))
    return channel


@pytest.fixture
def leaderboard(database, channel):
    return LeaderboardSystem(database, lambda channel_id: channel if channel_id == CHANNEL_ID else None)


@pytest.fixture
def leaderboard_channel(database):
    settings = database.get_settings(GUILD_ID)
    settings.leaderboard_channel_id = CHANNEL_ID
    database.save_settings()
    return settings


def set_elo(database, user_id, elo_1v1, elo_2v2=800):
    record = database.get_player(GUILD_ID, user_id)
    record.elo_1v1 = elo_1v1
    record.elo_2v2 = elo_2v2
    database.save_players()


def test_rankings_sort_by_elo_then_user_id(database, leaderboard):
    set_elo(database, 3, 1000)
    set_elo(database, 1, 1200)
    set_elo(database, 2, 1000)
    database.get_player(GUILD_ID + 1, 4).elo_1v1 = 3000

    ranked = leaderboard.rankings(GUILD_ID, '1v1')
    assert [record.user_id for record in ranked] == [1, 2, 3]


def test_rankings_use_the_requested_mode(database, leaderboard):
    set_elo(database, 1, 1500, 900)
    set_elo(database, 2, 900, 1500)

    assert [record.user_id for record in leaderboard.rankings(GUILD_ID, '2v2')] == [2, 1]


def test_rankings_keep_top_ten(database, leaderboard):
    for user_id in range(1, 13):
        set_elo(database, user_id, 800 + user_id * 10)

    ranked = leaderboard.rankings(GUILD_ID, '1v1')
    assert len(ranked) == 10
    assert ranked[0].user_id == 12
    assert ranked[-1].user_id == 3


def test_render_lines(database, leaderboard):
    set_elo(database, 1, 1650)
    set_elo(database, 2, 1250)
    set_elo(database, 3, 1000)
    set_elo(database, 4, 700)

    lines = leaderboard.render(GUILD_ID, '1v1').description.split('\n')

    assert lines[0] == '🥇 <@1> - 1650 ELO 💎 DIAMOND'
    assert lines[1] == '🥈 <@2> - 1250 ELO 🥇 GOLD'
    assert lines[2] == '🥉 <@3> - 1000 ELO 🥈 SILVER'
    assert lines[3] == '**4.** <@4> - 700 ELO ⚪ UNRANKED'


def test_render_empty(leaderboard):
    embed = leaderboard.render(GUILD_ID, '2v2')
    assert embed.description == 'No players have been registered yet!'
    assert embed.fields[0].value.startswith('💎 DIAMOND: 1600+')
    assert embed.footer.text == 'Hosts adjust ELO with /addelo and /removeelo'


async def test_sync_without_channel_configured(leaderboard):
    with pytest.raises(NotFoundError):
        await leaderboard.sync(GUILD_ID, '1v1')


async def test_sync_with_unresolvable_channel(database, leaderboard, leaderboard_channel):
    leaderboard_channel.leaderboard_channel_id = CHANNEL_ID + 1

    with pytest.raises(NotFoundError):
        await leaderboard.sync(GUILD_ID, '1v1')


async def test_sync_creates_and_stores_panel(database, leaderboard, channel, leaderboard_channel):
    set_elo(database, 1, 900)

    result = await leaderboard.sync(GUILD_ID, '1v1')

    assert (result.mode, result.message_id, result.action, result.entry_count) == ('1v1', 900, 'created', 1)
    channel.fetch_message.assert_not_called()

    reloaded = Database(str(database.data_dir))
    reloaded.load()
    assert reloaded.get_settings(GUILD_ID).leaderboard_message_ids['1v1'] == 900


async def test_sync_twice_edits_the_same_panel(leaderboard, channel, leaderboard_channel):
    first = await leaderboard.sync(GUILD_ID, '1v1')
    second = await leaderboard.sync(GUILD_ID, '1v1')
    third = await leaderboard.sync(GUILD_ID, '1v1')

    assert first.action == 'created'
    assert (second.action, third.action) == ('edited', 'edited')
    assert second.message_id == third.message_id == first.message_id
    assert channel.send.await_count == 1
    assert channel.panel.edit.await_count == 2
    channel.fetch_message.assert_awaited_with(900)


async def test_sync_recreates_deleted_panel(leaderboard, channel, leaderboard_channel):
    leaderboard_channel.leaderboard_message_ids['1v1'] = 850
    channel.fetch_message.side_effect = http_error(discord.NotFound, 404, 'Not Found', 'Unknown Message')

    result = await leaderboard.sync(GUILD_ID, '1v1')

    assert result.action == 'recreated'
    assert result.message_id == 900
    assert leaderboard_channel.leaderboard_message_ids['1v1'] == 900


async def test_sync_surfaces_other_failures(leaderboard, channel, leaderboard_channel):
    leaderboard_channel.leaderboard_message_ids['1v1'] = 850
    channel.fetch_message.side_effect = http_error(discord.HTTPException, 500, 'Server Error', 'boom')

    with pytest.raises(ExternalCallFailure):
        await leaderboard.sync(GUILD_ID, '1v1')

    channel.send.assert_not_called()
    assert leaderboard_channel.leaderboard_message_ids['1v1'] == 850


async def test_sync_send_failure(leaderboard, channel, leaderboard_channel):
    channel.send.side_effect = http_error(discord.Forbidden, 403, 'Forbidden', 'Missing Access')

    with pytest.raises(ExternalCallFailure):
        await leaderboard.sync(GUILD_ID, '2v2')
    assert leaderboard_channel.leaderboard_message_ids['2v2'] is None


async def test_sync_all_covers_both_modes(leaderboard, channel, leaderboard_channel):
    channel.send.side_effect = [SimpleNamespace(id=901), SimpleNamespace(id=902)]

    results = await leaderboard.sync_all(GUILD_ID)

    assert [(result.mode, result.message_id) for result in results] == [('1v1', 901), ('2v2', 902)]
    assert leaderboard_channel.leaderboard_message_ids == {'1v1': 901, '2v2': 902}
