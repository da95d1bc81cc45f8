"""주기 작업 스케줄러: 고아 미디어 정리.

Periodic task scheduler: Runs the orphaned-media sweep on a fixed
interval, independently of request handling.
"""

import asyncio
import logging

from maintenance_api.repositories.base import JsonCollectionStore
from maintenance_api.services.media_service import media_service

logger = logging.getLogger(__name__)


def run_cleanup_pass(store: JsonCollectionStore) -> int:
    """모든 기관에 대해 정리를 1회 실행합니다 (Run one sweep; return files removed)."""
    removed = media_service.cleanup_all(store)
    return sum(len(names) for names in removed.values())


async def cleanup_loop(store: JsonCollectionStore, interval_seconds: float) -> None:
    """정리 루프: 한 번의 실패가 루프를 멈추지 않음.

    Sleep, sweep, repeat until cancelled. A failed pass is logged and the
    next one runs on schedule.
    """
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            total = await asyncio.to_thread(run_cleanup_pass, store)
        except Exception:
            logger.exception("Media cleanup pass failed")
            continue
        logger.info("Media cleanup pass finished, %d file(s) removed", total)
