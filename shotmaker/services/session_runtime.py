"""Per-session event loop for driving a WizardController from a UI thread.

Streamlit runs page scripts on short-lived threads, while the wizard's
timers and image requests need a loop that outlives a single rerun. Each
session gets one loop on a daemon thread; every controller call is marshalled
onto it so state is only ever mutated from that thread.

The loop thread holds no reference back to its SessionRuntime. When Streamlit
drops an expired session's state, the runtime is collected and its loop is
stopped. Streamlit offers no session-end callback, so a session that is never
collected (for instance because something else still references its runtime)
keeps its thread until the process exits.
"""

import asyncio
import logging
import threading
import weakref
from concurrent.futures import Future
from typing import Any, Awaitable, Callable, Optional

from shotmaker.config import Config
from shotmaker.services.wizard import WizardController

logger = logging.getLogger(__name__)

# Long enough for a slow script generation round-trip
DEFAULT_CALL_TIMEOUT = 180.0


def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
    asyncio.set_event_loop(loop)
    try:
        loop.run_forever()
    finally:
        loop.close()


def _shutdown_and_stop(loop: asyncio.AbstractEventLoop, controller: Optional[WizardController]) -> None:
    """Runs on the loop thread: cancel the controller's work, then stop."""
    if controller is not None:
        try:
            controller.shutdown()
        except Exception as e:
            logger.warning(f"Controller shutdown failed: {e}")
    loop.stop()


def _stop_loop(loop: asyncio.AbstractEventLoop, holder: dict) -> None:
    if loop.is_closed():
        return
    try:
        loop.call_soon_threadsafe(_shutdown_and_stop, loop, holder.get("controller"))
    except RuntimeError:
        # Loop closed between the check and the call
        logger.debug("Session loop already closed")


class SessionRuntime:
    """An event loop thread owning one WizardController."""

    def __init__(
        self,
        controller_factory: Optional[Callable[[], WizardController]] = None,
        config: Optional[Config] = None,
    ):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=_run_loop, args=(self.loop,), name="shotmaker-session", daemon=True
        )
        self._thread.start()

        # Shared with the finalizer, which must not reference self
        self._holder: dict = {}
        self._finalizer = weakref.finalize(self, _stop_loop, self.loop, self._holder)

        self.controller = self.call(controller_factory or (lambda: WizardController(config=config)))
        self._holder["controller"] = self.controller

    @property
    def alive(self) -> bool:
        return self._thread.is_alive() and not self.loop.is_closed()

    def call(self, fn: Callable[..., Any], *args, timeout: float = DEFAULT_CALL_TIMEOUT, **kwargs) -> Any:
        """Run a plain function on the loop thread and return its result."""

        async def _invoke():
            return fn(*args, **kwargs)

        return asyncio.run_coroutine_threadsafe(_invoke(), self.loop).result(timeout)

    def submit(self, coro_fn: Callable[..., Awaitable[Any]], *args, **kwargs) -> Future:
        """Schedule a coroutine function on the loop without waiting."""
        return asyncio.run_coroutine_threadsafe(coro_fn(*args, **kwargs), self.loop)

    def run(self, coro_fn: Callable[..., Awaitable[Any]], *args, timeout: float = DEFAULT_CALL_TIMEOUT, **kwargs) -> Any:
        """Run a coroutine function on the loop and wait for its result."""
        return self.submit(coro_fn, *args, **kwargs).result(timeout)

    def close(self) -> None:
        """Tear down the controller's timers and stop the loop."""
        if not self.alive:
            return
        self._finalizer()
        self._thread.join(timeout=5.0)
