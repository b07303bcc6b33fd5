"""Tests for the SQLite audit log."""

from conftest import GUILD_ID


async def test_recent_actions_newest_first(audit_log):
    assert await audit_log.log_action(GUILD_ID, 'report_win', 1, 2, 'win')
    assert await audit_log.log_action(GUILD_ID, 'add_elo', 1, 3, '1v1 800 -> 900')
    await audit_log.log_action(GUILD_ID + 1, 'dodge', 5, 6)

    entries = await audit_log.recent_actions(GUILD_ID)

    assert [entry['action_type'] for entry in entries] == ['add_elo', 'report_win']
    assert entries[0]['target_id'] == 3
    assert entries[0]['details'] == '1v1 800 -> 900'


async def test_recent_actions_limit(audit_log):
    for index in range(5):
        await audit_log.log_action(GUILD_ID, 'dodge', 1, index)

    entries = await audit_log.recent_actions(GUILD_ID, limit=2)
    assert [entry['target_id'] for entry in entries] == [4, 3]


async def test_write_failure_returns_false(tmp_path):
    from database.audit_log import AuditLog

    # Table never created
    log = AuditLog(str(tmp_path / 'missing.db'))
    assert await log.log_action(GUILD_ID, 'dodge') is False
