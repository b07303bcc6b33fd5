"""Tests for opening, joining and closing match rooms."""

from unittest.mock import AsyncMock

import pytest

from conftest import GUILD_ID, HOST_ROLE_ID
from systems.match_system import MatchSystem
from utils.exceptions import ConfigurationError, ExternalCallFailure, ForbiddenError, NotFoundError
from utils.scheduler import TaskScheduler

ROOM_ID = 555


@pytest.fixture
def gateway():
    gateway = AsyncMock()
    gateway.create_room.return_value = ROOM_ID
    return gateway


@pytest.fixture
def match_system(database, gateway):
    return MatchSystem(database, gateway, TaskScheduler(), delete_delay=0)


@pytest.fixture
def creator(make_member):
    return make_member(10, name='alice')


@pytest.fixture
async def room(match_system, guild, creator, hosts_configured):
    return await match_system.start(guild, '1v1', creator)


async def test_start_requires_host_roles(match_system, gateway, guild, creator):
    with pytest.raises(ConfigurationError) as excinfo:
        await match_system.start(guild, '1v1', creator)

    assert excinfo.value.kind == 'configuration'
    assert '/sethosts' in excinfo.value.user_message
    gateway.create_room.assert_not_called()


async def test_start_records_room(match_system, database, gateway, guild, creator, hosts_configured):
    room = await match_system.start(guild, '2v2', creator)

    assert room.room_id == ROOM_ID
    assert room.participants == [creator.id]
    assert database.get_match(ROOM_ID) is room
    gateway.create_room.assert_awaited_once_with(guild, '2v2-alice', creator, [HOST_ROLE_ID], None)

    gateway.send_message.assert_awaited_once()
    content = gateway.send_message.await_args.kwargs['content']
    assert creator.mention in content
    assert f'<@&{HOST_ROLE_ID}>' in content


async def test_start_uses_configured_category(match_system, gateway, guild, creator, hosts_configured, database):
    hosts_configured.match_category_id = 77
    database.save_settings()

    await match_system.start(guild, '1v1', creator)
    assert gateway.create_room.await_args.args[4] == 77


async def test_room_creation_failure_records_nothing(match_system, database, gateway, guild, creator,
                                                     hosts_configured):
    gateway.create_room.side_effect = ExternalCallFailure('create match', 'Missing Permissions')

    with pytest.raises(ExternalCallFailure):
        await match_system.start(guild, '1v1', creator)
    assert database.matches == {}


async def test_welcome_failure_is_not_fatal(match_system, database, gateway, guild, creator, hosts_configured):
    gateway.send_message.side_effect = ExternalCallFailure('send message')

    room = await match_system.start(guild, '1v1', creator)
    assert database.get_match(room.room_id) is room


async def test_add_participant_by_creator(match_system, gateway, room, creator, make_member):
    target = make_member(20)

    await match_system.add_participant(ROOM_ID, creator, target)
    await match_system.add_participant(ROOM_ID, creator, target)

    assert room.participants == [creator.id, target.id]
    assert gateway.grant_access.await_count == 2


async def test_add_participant_by_host(match_system, room, make_member):
    host = make_member(30, role_ids=[HOST_ROLE_ID])
    target = make_member(20)

    await match_system.add_participant(ROOM_ID, host, target)
    assert target.id in room.participants


async def test_add_participant_forbidden_for_others(match_system, gateway, room, creator, make_member):
    outsider = make_member(40)

    with pytest.raises(ForbiddenError):
        await match_system.add_participant(ROOM_ID, outsider, make_member(20))

    assert room.participants == [creator.id]
    gateway.grant_access.assert_not_called()


async def test_add_participant_unknown_room(match_system, creator, make_member):
    with pytest.raises(NotFoundError):
        await match_system.add_participant(999, creator, make_member(20))


async def test_grant_failure_leaves_participants_unchanged(match_system, gateway, room, creator, make_member):
    gateway.grant_access.side_effect = ExternalCallFailure('add user to this match')

    with pytest.raises(ExternalCallFailure):
        await match_system.add_participant(ROOM_ID, creator, make_member(20))
    assert room.participants == [creator.id]


async def test_close_requires_host(match_system, database, room, creator):
    with pytest.raises(ForbiddenError):
        await match_system.close(ROOM_ID, creator)
    assert database.get_match(ROOM_ID) is room


async def test_close_removes_room_and_deletes_channel(match_system, database, gateway, room, make_member):
    admin = make_member(50, admin=True)

    handle = await match_system.close(ROOM_ID, admin)
    assert database.get_match(ROOM_ID) is None
    with pytest.raises(NotFoundError):
        match_system.get_room(ROOM_ID)

    await handle.wait()
    assert handle.done
    gateway.delete_room.assert_awaited_once()
    assert gateway.delete_room.await_args.args[0] == ROOM_ID


async def test_close_deletion_failure_is_kept_on_handle(match_system, gateway, room, make_member):
    gateway.delete_room.side_effect = ExternalCallFailure('delete match room')

    handle = await match_system.close(ROOM_ID, make_member(50, admin=True))
    await handle.wait()

    assert isinstance(handle.error, ExternalCallFailure)
    assert gateway.delete_room.await_count == 1


async def test_close_can_be_cancelled(database, gateway, room, make_member):
    match_system = MatchSystem(database, gateway, TaskScheduler(), delete_delay=60)

    handle = await match_system.close(ROOM_ID, make_member(50, admin=True))
    assert handle.cancel()
    await handle.wait()

    assert handle.cancelled
    gateway.delete_room.assert_not_called()


async def test_prune_missing_rooms(match_system, database, room):
    assert match_system.prune_missing_rooms(lambda room_id: True) == 0
    assert match_system.prune_missing_rooms(lambda room_id: False) == 1
    assert database.matches == {}
