"""Tests for the JSON table store and load-time normalization."""

import json
from datetime import datetime, timezone

import pytest

from conftest import GUILD_ID
from database.models import MatchRoom
from database.store import Database


def write_table(data_dir, name, data):
    with open(data_dir / name, 'w', encoding='utf-8') as handle:
        json.dump(data, handle)


def read_table(data_dir, name):
    with open(data_dir / name, encoding='utf-8') as handle:
        return json.load(handle)


def test_load_with_no_files(tmp_path):
    db = Database(str(tmp_path))
    db.load()

    assert db.settings == {}
    assert db.matches == {}
    assert db.players == {}


def test_player_is_created_lazily_and_written(database):
    record = database.get_player(GUILD_ID, 42)

    assert record.elo_1v1 == 800
    assert record.elo_2v2 == 800
    stored = read_table(database.data_dir, 'players.json')
    assert stored[f'{GUILD_ID}-42']['userId'] == '42'
    assert stored[f'{GUILD_ID}-42']['guildId'] == str(GUILD_ID)


def test_tables_are_pretty_printed(database):
    database.get_player(GUILD_ID, 42)
    text = (database.data_dir / 'players.json').read_text(encoding='utf-8')

    assert text.startswith('{\n  "')
    assert not (database.data_dir / 'players.json.tmp').exists()


def test_legacy_player_is_migrated(tmp_path):
    write_table(tmp_path, 'players.json', {
        f'{GUILD_ID}-7': {
            'userId': '7', 'guildId': str(GUILD_ID), 'wins': 3, 'losses': -2,
            'currentStreak': 2, 'autoWinStreak': 2, 'autoLoseStreak': 4, 'elo': 1250,
        }
    })

    db = Database(str(tmp_path))
    db.load()
    record = db.get_player(GUILD_ID, 7)

    assert record.elo_legacy == 1250
    assert record.elo_1v1 == 800
    assert record.elo_2v2 == 800
    assert record.losses == 0
    assert record.auto_win_streak == 2
    assert record.auto_lose_streak == 0
    assert record.dodges == 0

    stored = read_table(tmp_path, 'players.json')[f'{GUILD_ID}-7']
    assert 'elo' not in stored
    assert stored['eloLegacy'] == 1250


def test_settings_are_normalized(tmp_path):
    write_table(tmp_path, 'settings.json', {
        str(GUILD_ID): {'hostRoles': ['1', '2', '1', '3', '4'], 'matchCategory': '99', 'logChannel': None}
    })

    db = Database(str(tmp_path))
    db.load()
    settings = db.get_settings(GUILD_ID)

    assert settings.host_role_ids == [1, 2, 3]
    assert settings.match_category_id == 99
    assert settings.leaderboard_message_ids == {'1v1': None, '2v2': None}
    assert settings.dodge_channel_id is None


def test_matches_are_normalized_and_round_trip(tmp_path):
    write_table(tmp_path, 'matches.json', {
        '500': {'type': '2v2', 'creator': '10', 'participants': ['11', '10', '11'], 'createdAt': 1700000000000}
    })

    db = Database(str(tmp_path))
    db.load()
    room = db.get_match(500)

    assert room.participants == [10, 11]
    assert room.match_type == '2v2'
    assert room.created_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)

    stored = read_table(tmp_path, 'matches.json')['500']
    assert stored['participants'] == ['10', '11']
    assert stored['createdAt'] == 1700000000000


def test_put_and_delete_match(database):
    database.put_match(MatchRoom(room_id=9, guild_id=GUILD_ID, match_type='1v1',
                                 creator_id=1, participants=[1]))
    assert '9' in read_table(database.data_dir, 'matches.json')

    assert database.delete_match(9) is True
    assert database.delete_match(9) is False
    assert read_table(database.data_dir, 'matches.json') == {}


def test_settings_round_trip(database):
    settings = database.get_settings(GUILD_ID)
    settings.host_role_ids = [5, 6]
    settings.leaderboard_channel_id = 70
    settings.leaderboard_message_ids['2v2'] = 71
    database.save_settings()

    reloaded = Database(str(database.data_dir))
    reloaded.load()
    copy = reloaded.get_settings(GUILD_ID)

    assert copy.host_role_ids == [5, 6]
    assert copy.leaderboard_channel_id == 70
    assert copy.leaderboard_message_ids == {'1v1': None, '2v2': 71}


def test_table_that_is_not_an_object_is_rejected(tmp_path):
    (tmp_path / 'players.json').write_text('[]', encoding='utf-8')

    with pytest.raises(ValueError):
        Database(str(tmp_path)).load()
