"""Lifecycle helpers to keep app.py thinner."""
import asyncio
import logging

logger = logging.getLogger(__name__)


async def shutdown_resources(db_client, connect_task=None):
    """Cancel a pending connection attempt and close DB client."""
    if connect_task is not None and not connect_task.done():
        connect_task.cancel()
        await asyncio.gather(connect_task, return_exceptions=True)
        logger.info("Pending MongoDB connection attempt cancelled")

    try:
        db_client.close()
        logger.info("MongoDB connection closed")
    except Exception as exc:
        logger.warning(f"Error closing MongoDB client: {exc}")
