"""Tests for the keep-alive HTTP endpoints."""

import time

import pytest

from web.health_server import create_health_app


@pytest.fixture
async def client(aiohttp_client):
    return await aiohttp_client(create_health_app(time.monotonic() - 42))


async def test_index(client):
    page = await client.get('/')
    assert page.status == 200
    assert await page.text() == 'Bot is alive!'


async def test_health(client):
    page = await client.get('/health')
    assert page.status == 200

    data = await page.json()
    assert data['status'] == 'ok'
    assert data['uptime'] >= 42
    assert 'T' in data['timestamp']


async def test_404(client):
    assert (await client.get('/nope')).status == 404
