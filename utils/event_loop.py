"""
Background event loop for synchronous callers.

Streamlit runs each session's script on its own thread. The chat service
holds asyncio locks and sessions, which must all live on one loop, so
every coroutine is submitted to a single long-lived loop thread instead
of a fresh asyncio.run() per message.
"""

import asyncio
import logging
import threading
from typing import Any, Coroutine, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackgroundEventLoop:
    """
    An event loop running forever on a daemon thread.

    Args:
        name: Thread name (shows up in logs and thread dumps)
    """

    def __init__(self, name: str = "course-bot-loop"):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()
        logger.info(f"✅ Background event loop started ({name})")

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def run(self, coro: Coroutine[Any, Any, T], timeout: Optional[float] = None) -> T:
        """
        Run a coroutine on the loop thread and block until it finishes.

        Raises:
            RuntimeError: If called from the loop thread itself
            concurrent.futures.TimeoutError: If timeout elapses first
        """
        if threading.current_thread() is self._thread:
            coro.close()
            raise RuntimeError("BackgroundEventLoop.run() called from its own loop thread")
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(timeout)

    def close(self) -> None:
        """Stop the loop and wait for the thread to exit."""
        if self.loop.is_closed():
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join()
        self.loop.close()
        logger.info("🛑 Background event loop stopped")
