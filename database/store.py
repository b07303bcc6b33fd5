"""
JSON Table Store
In-memory settings, matches and players tables mirrored to pretty-printed
JSON files, rewritten whole on every mutation
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable, Tuple
from config import DATA_CONFIG
from database.models import (
    PlayerRecord, GuildSettings, MatchRoom, player_key,
    normalize_player, normalize_settings, normalize_match
)

logger = logging.getLogger('RankedBot.Database')


class JsonTable:
    """One mapping of string keys to JSON objects, stored in a single file"""

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f'{self.path} does not contain a JSON object')
        return data

    def write(self, data: Dict[str, Any]):
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        with tmp_path.open('w', encoding='utf-8') as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
            handle.write('\n')
        os.replace(tmp_path, self.path)


class Database:
    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = Path(data_dir or DATA_CONFIG['data_dir'])
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self.settings_table = JsonTable(self.data_dir / DATA_CONFIG['settings_file'])
        self.matches_table = JsonTable(self.data_dir / DATA_CONFIG['matches_file'])
        self.players_table = JsonTable(self.data_dir / DATA_CONFIG['players_file'])

        self.settings: Dict[int, GuildSettings] = {}
        self.matches: Dict[int, MatchRoom] = {}
        self.players: Dict[str, PlayerRecord] = {}

    def load(self):
        """Load all tables from disk, normalizing older entries once"""
        logger.info(f'Loading data from {self.data_dir}')

        raw_settings, settings_changed = self._load_normalized(self.settings_table, normalize_settings)
        self.settings = {
            int(guild_id): GuildSettings.from_dict(guild_id, entry)
            for guild_id, entry in raw_settings.items()
        }

        raw_matches, matches_changed = self._load_normalized(self.matches_table, normalize_match)
        self.matches = {
            int(room_id): MatchRoom.from_dict(room_id, entry)
            for room_id, entry in raw_matches.items()
        }

        raw_players, players_changed = self._load_normalized(self.players_table, normalize_player)
        self.players = {}
        for entry in raw_players.values():
            record = PlayerRecord.from_dict(entry)
            self.players[record.key] = record

        if settings_changed:
            self.save_settings()
        if matches_changed:
            self.save_matches()
        if players_changed:
            self.save_players()

        logger.info(f'Loaded {len(self.settings)} guild settings')
        logger.info(f'Loaded {len(self.matches)} active matches')
        logger.info(f'Loaded {len(self.players)} player stats')

    def _load_normalized(self, table: JsonTable,
                         normalize: Callable[[Dict[str, Any]], Tuple[Dict[str, Any], bool]]
                         ) -> Tuple[Dict[str, Any], bool]:
        raw = table.read()
        normalized = {}
        changed = False
        for key, entry in raw.items():
            normalized[key], entry_changed = normalize(entry)
            changed = changed or entry_changed

        if changed:
            logger.info(f'Normalized entries in {table.path.name}')
        return normalized, changed

    # Whole-table writes
    def save_settings(self):
        self._save(self.settings_table, {
            str(guild_id): settings.to_dict() for guild_id, settings in self.settings.items()
        })

    def save_matches(self):
        self._save(self.matches_table, {
            str(room_id): room.to_dict() for room_id, room in self.matches.items()
        })

    def save_players(self):
        self._save(self.players_table, {
            key: record.to_dict() for key, record in self.players.items()
        })

    def _save(self, table: JsonTable, data: Dict[str, Any]):
        try:
            table.write(data)
        except OSError as e:
            logger.error(f'Error saving {table.path}: {e}')
            raise

    # Guild settings
    def get_settings(self, guild_id: int) -> GuildSettings:
        """Get settings for a guild, creating empty defaults on first use"""
        settings = self.settings.get(guild_id)
        if settings is None:
            settings = GuildSettings(guild_id=guild_id)
            self.settings[guild_id] = settings
            self.save_settings()
        return settings

    # Match rooms
    def get_match(self, room_id: int) -> Optional[MatchRoom]:
        return self.matches.get(room_id)

    def put_match(self, room: MatchRoom):
        self.matches[room.room_id] = room
        self.save_matches()

    def delete_match(self, room_id: int) -> bool:
        if self.matches.pop(room_id, None) is None:
            return False
        self.save_matches()
        return True

    # Player records
    def get_player(self, guild_id: int, user_id: int) -> PlayerRecord:
        """Get a player record, creating it with defaults on first lookup"""
        key = player_key(guild_id, user_id)
        record = self.players.get(key)
        if record is None:
            record = PlayerRecord(guild_id=guild_id, user_id=user_id)
            self.players[key] = record
            self.save_players()
        return record

    def get_guild_players(self, guild_id: int) -> List[PlayerRecord]:
        return [record for record in self.players.values() if record.guild_id == guild_id]
