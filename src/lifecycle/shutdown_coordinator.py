"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import List, Optional, Dict, Set

from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Maintains a list of shutdown handlers and executes them in priority order
    when shutdown is triggered. Also watches TaskRegistry: a failed task in a
    critical category (API server, cadences) triggers shutdown too.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(PreviewShutdownHandler(preview, config_service))
        coordinator.register(APIServerShutdownHandler(api_wrapper))
        coordinator.register(TaskCancellationHandler())

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    CRITICAL_CATEGORIES: Set[str] = {"API", "CADENCE"}

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT (Ctrl+C) and SIGTERM handlers on the running loop"""
        self._shutdown_event = asyncio.Event()

        def signal_handler(sig: signal.Signals) -> None:
            self.request_shutdown(sig.name)

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown programmatically (signals, tests)"""
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        self._shutdown_trigger["reason"] = reason
        log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    # ------------------------------------------------------------------
    # Critical task monitoring
    # ------------------------------------------------------------------

    def _critical_tasks(self) -> List[asyncio.Task]:
        return [
            r.task for r in TaskRegistry.instance().active()
            if r.info.category.name in self.CRITICAL_CATEGORIES
        ]

    def _check_critical_task_failures(self) -> bool:
        """True (and shutdown reason set) if a critical task already failed"""
        for record in TaskRegistry.instance().failed():
            if record.info.category.name in self.CRITICAL_CATEGORIES:
                log.error(
                    f"Critical task failed: {record.info.description}",
                    category=record.info.category.name,
                    error=repr(record.finished_with_error)
                )
                self._shutdown_trigger["reason"] = f"Task failure: {record.info.description}"
                return True
        return False

    async def _wait_once(self, critical_tasks: List[asyncio.Task]) -> bool:
        """
        Wait for the shutdown event or any critical task to finish.

        Returns:
            True if the shutdown event is set
        """
        shutdown_waiter = asyncio.create_task(self._shutdown_event.wait())
        wait_set: Set[asyncio.Task] = set(critical_tasks)
        wait_set.add(shutdown_waiter)

        try:
            # Cadences restart with fresh tasks; the timeout re-reads the registry
            await asyncio.wait(wait_set, timeout=0.5, return_when=asyncio.FIRST_COMPLETED)
        finally:
            # Only the waiter belongs to us; critical tasks keep running
            if not shutdown_waiter.done():
                shutdown_waiter.cancel()

        return self._shutdown_event.is_set()

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown signal or a critical task failure.

        Raises:
            RuntimeError: If signal handlers weren't set up
        """
        if self._shutdown_event is None:
            raise RuntimeError("Call setup_signal_handlers() first")

        while not self._shutdown_event.is_set():
            if self._check_critical_task_failures():
                return

            if await self._wait_once(self._critical_tasks()):
                log.debug("Shutdown triggered")
                return

    # ------------------------------------------------------------------
    # Shutdown sequence
    # ------------------------------------------------------------------

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        Each handler has its own timeout (timeout_per_handler) and the entire
        sequence has a global timeout (total_timeout). A failing handler does
        not stop the remaining ones.
        """
        log.info("Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"{handler_name} shutdown complete")

            except asyncio.TimeoutError:
                log.error(f"{handler_name} shutdown timeout ({self._timeout_per_handler}s)")

            except asyncio.CancelledError:
                log.warn(f"{handler_name} shutdown was cancelled")
                raise

            except Exception as e:
                log.error(f"Error shutting down {handler_name}: {e}", error_type=type(e).__name__)

        log.info("Shutdown sequence complete", tasks=TaskRegistry.instance().summary())

    def get_handler(self, handler_type: type):
        """Get a registered handler by type (tests, debugging)"""
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
