"""
Dramatiq broker for background knowledge migrations.

Importing this module installs the broker globally, so it must be imported
before any actor is declared.
"""

import dramatiq
from dramatiq.brokers.redis import RedisBroker
from dramatiq.middleware import AsyncIO

from scholar_assist.core.config import Settings

settings = Settings()

dramatiq_broker = RedisBroker(url=settings.REDIS_URL)

# Async actors need the AsyncIO middleware's event loop thread
dramatiq_broker.add_middleware(AsyncIO())

dramatiq.set_broker(dramatiq_broker)
