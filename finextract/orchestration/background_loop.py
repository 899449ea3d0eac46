import asyncio
import threading
from collections.abc import Coroutine
from concurrent.futures import Future
from typing import Any, TypeVar

from finextract.logging.logger import Log

T = TypeVar("T")


class BackgroundLoop:
    """An asyncio event loop running on a daemon thread.

    Lets the UI thread fire off extraction coroutines and return immediately.
    """

    def __init__(self, name: str = "finextract-loop") -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive() and not self._loop.is_closed()

    def submit(self, coro: Coroutine[Any, Any, T]) -> "Future[T]":
        """Schedule ``coro`` on the loop; the returned future resolves with its result."""
        if not self.is_running:
            coro.close()
            raise RuntimeError("Background loop is not running")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop the loop and wait for the thread; pending tasks are cancelled."""
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        Log.debug("Background loop stopped")

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        Log.debug("Background loop started")
        try:
            self._loop.run_forever()
        finally:
            pending = asyncio.all_tasks(self._loop)
            for task in pending:
                task.cancel()
            if pending:
                self._loop.run_until_complete(
                    asyncio.gather(*pending, return_exceptions=True)
                )
            self._loop.close()
