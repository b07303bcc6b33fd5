"""
Health Server
Keep-alive endpoints for hosting platforms that ping the bot over HTTP
"""

import aiohttp.web
import logging
import time
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger('RankedBot.HealthServer')


def create_health_app(started_at: Optional[float] = None) -> aiohttp.web.Application:
    """
    Build the health check application

    Args:
        started_at: Monotonic start time used for uptime, defaults to now

    Returns:
        aiohttp application serving / and /health
    """
    app = aiohttp.web.Application()
    app['started_at'] = time.monotonic() if started_at is None else started_at
    app.add_routes([
        aiohttp.web.get('/', index_handler),
        aiohttp.web.get('/health', health_handler),
    ])
    return app


async def index_handler(request):
    return aiohttp.web.Response(text='Bot is alive!')


async def health_handler(request):
    uptime = time.monotonic() - request.app['started_at']
    return aiohttp.web.json_response({
        'status': 'ok',
        'uptime': round(uptime, 3),
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


async def start_health_server(host: str, port: int) -> aiohttp.web.AppRunner:
    """Start serving the health app in the running event loop"""
    runner = aiohttp.web.AppRunner(create_health_app())
    await runner.setup()
    site = aiohttp.web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f'Health server listening on {host}:{port}')
    return runner
