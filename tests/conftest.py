"""
Pytest configuration and fixtures.

Provides a store backed by a temporary data directory and lightweight
stand-ins for Discord members and guilds.
"""

from types import SimpleNamespace

import pytest

from database.store import Database
from database.audit_log import AuditLog
from systems.rating_system import RatingSystem

GUILD_ID = 111111111111111111
HOST_ROLE_ID = 222222222222222222


@pytest.fixture
def database(tmp_path):
    """A loaded store writing into its own temporary data directory."""
    db = Database(str(tmp_path))
    db.load()
    return db


@pytest.fixture
def rating_system(database):
    return RatingSystem(database)


@pytest.fixture
async def audit_log(tmp_path):
    log = AuditLog(str(tmp_path / 'audit.db'))
    await log.initialize()
    return log


@pytest.fixture
def guild():
    return SimpleNamespace(id=GUILD_ID)


@pytest.fixture
def make_member(guild):
    """
    Build member stand-ins with the attributes host checks read.

    Usage::

        host = make_member(5, role_ids=[HOST_ROLE_ID])
        admin = make_member(6, admin=True)
    """
    def factory(user_id, role_ids=(), admin=False, name=None):
        return SimpleNamespace(
            id=user_id,
            name=name or f'player{user_id}',
            display_name=name or f'Player {user_id}',
            mention=f'<@{user_id}>',
            roles=[SimpleNamespace(id=role_id) for role_id in role_ids],
            guild_permissions=SimpleNamespace(administrator=admin),
            guild=guild,
        )
    return factory


@pytest.fixture
def hosts_configured(database):
    settings = database.get_settings(GUILD_ID)
    settings.host_role_ids = [HOST_ROLE_ID]
    database.save_settings()
    return settings
