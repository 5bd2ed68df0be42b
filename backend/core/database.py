"""MongoDB async database connection - single source of truth"""
import logging
import threading

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import monitoring

from core import config

logger = logging.getLogger(__name__)


class ConnectionOpenedListener(monitoring.ServerHeartbeatListener):
    """Logs once, on the first successful heartbeat to any server.

    Heartbeats arrive on the driver's monitor threads, one per server.
    """

    def __init__(self, url):
        self.url = url
        self._opened = False
        self._lock = threading.Lock()

    def started(self, event):
        pass

    def succeeded(self, event):
        with self._lock:
            if self._opened:
                return
            self._opened = True
        logger.info(f"successfully connected to database: {self.url}")

    def failed(self, event):
        logger.debug(f"Heartbeat to {event.connection_id} failed: {event.reply}")


def create_client() -> AsyncIOMotorClient:
    """Build the client for DATABASE_URL. No I/O happens until first use."""
    url = config.get_database_url()
    return AsyncIOMotorClient(url, event_listeners=[ConnectionOpenedListener(url)])


async def connect(client: AsyncIOMotorClient) -> AsyncIOMotorClient:
    await client.admin.command("ping")
    return client


async def init_database() -> AsyncIOMotorClient:
    """Open the connection to DATABASE_URL and resolve to the client.

    Driver errors are not caught. Wrap in asyncio.create_task() to avoid waiting.
    """
    return await connect(create_client())


def get_database(client: AsyncIOMotorClient):
    """Database named in the connection string, else DB_NAME."""
    return client.get_default_database(config.DB_NAME)
