"""
TimerPreviewController - live preview runtime

Owns the TimerController, the blink phase and the two cadences (tick and
blink). After every state change it re-derives whether each cadence should
be running and reconciles, instead of starting/stopping timers from
scattered call sites.
"""

from __future__ import annotations

from typing import Optional

from engine.cadence import Cadence
from engine.display_mapper import compute_frame, should_blink
from engine.timer_controller import TimerController
from models.display_frame import DisplayFrame
from models.enums import TimerStatus, TransportAction
from models.events import (
    ConfigChangedEvent, EventType, FrameChangedEvent,
    TimerStateChangedEvent, TransportCommandEvent
)
from models.timer_state import TimerRuntimeState
from services.config_service import ConfigService
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DISPLAY)


class TimerPreviewController:
    """
    Drives the preview: transport operations, ticks, blink and frames.

    Cadences:
        tick  - every tick_interval while status == RUNNING
        blink - every blink_interval while the final message must blink

    The config is read from ConfigService on every frame; editing it takes
    effect on the next render.

    Example:
        preview = TimerPreviewController(config_service, event_bus)
        await preview.start()
        frame = preview.current_frame()
        await preview.shutdown()
    """

    def __init__(
        self,
        config_service: ConfigService,
        event_bus: Optional[EventBus] = None,
        tick_interval: float = 1.0,
        blink_interval: float = 0.5,
        controller: Optional[TimerController] = None,
    ):
        self.config_service = config_service
        self.event_bus = event_bus
        self.controller = controller or TimerController()

        # True = final message shown
        self._blink_phase: bool = True

        self.tick_cadence = Cadence(tick_interval, self.tick, description="Timer tick")
        self.blink_cadence = Cadence(blink_interval, self.toggle_blink, description="Final message blink")

        if event_bus:
            event_bus.subscribe(EventType.CONFIG_CHANGED, self._on_config_changed)
            event_bus.subscribe(EventType.TRANSPORT_COMMAND, self._on_transport_command)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerRuntimeState:
        return self.controller.state

    @property
    def blink_phase(self) -> bool:
        return self._blink_phase

    def current_frame(self) -> DisplayFrame:
        """Frame for the current state and the live config"""
        return compute_frame(
            self.controller.elapsed_seconds,
            self.config_service.get_config(),
            self._blink_phase,
            self.controller.status,
        )

    # ------------------------------------------------------------------
    # Transport operations
    # ------------------------------------------------------------------

    async def start(self) -> DisplayFrame:
        return await self._transport(TransportAction.START)

    async def pause(self) -> DisplayFrame:
        return await self._transport(TransportAction.PAUSE)

    async def stop(self) -> DisplayFrame:
        return await self._transport(TransportAction.STOP)

    async def reset(self) -> DisplayFrame:
        return await self._transport(TransportAction.RESET)

    async def apply(self, action: TransportAction) -> DisplayFrame:
        """Run a transport operation by name (API / Socket.IO commands)"""
        return await self._transport(action)

    async def _transport(self, action: TransportAction) -> DisplayFrame:
        operation = {
            TransportAction.START: self.controller.start,
            TransportAction.PAUSE: self.controller.pause,
            TransportAction.STOP: self.controller.stop,
            TransportAction.RESET: self.controller.reset,
        }[action]

        changed = operation()
        self._reconcile()

        if changed:
            await self._publish_state(action.value)
        return await self._publish_frame()

    # ------------------------------------------------------------------
    # Cadence callbacks
    # ------------------------------------------------------------------

    async def tick(self) -> None:
        """Tick cadence callback: advance one second while running"""
        if not self.controller.tick():
            return

        self._reconcile()
        await self._publish_state("tick")
        await self._publish_frame()

    async def toggle_blink(self) -> None:
        """Blink cadence callback: flip the final-message visibility"""
        if not self._should_blink():
            self._reconcile()
            return

        self._blink_phase = not self._blink_phase
        await self._publish_frame()

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def _should_tick(self) -> bool:
        return self.controller.status == TimerStatus.RUNNING

    def _should_blink(self) -> bool:
        return should_blink(
            self.controller.elapsed_seconds,
            self.config_service.get_config(),
            self.controller.status,
        )

    def _reconcile(self) -> None:
        """Match both cadences to their enabling predicates"""
        self.tick_cadence.reconcile(self._should_tick())

        blink_wanted = self._should_blink()
        if blink_wanted != self.blink_cadence.running:
            # Fresh cadence starts visible; leaving the condition shows the message
            self._blink_phase = True
            self.blink_cadence.reconcile(blink_wanted)
            log.debug("Blink cadence reconciled", running=blink_wanted)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def _on_config_changed(self, event: ConfigChangedEvent) -> None:
        self._reconcile()
        await self._publish_frame()

    async def _on_transport_command(self, event: TransportCommandEvent) -> None:
        await self._transport(event.action)

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    async def _publish_state(self, reason: str) -> None:
        if self.event_bus:
            await self.event_bus.publish(TimerStateChangedEvent(self.controller.state, reason))

    async def _publish_frame(self) -> DisplayFrame:
        frame = self.current_frame()
        if self.event_bus:
            await self.event_bus.publish(FrameChangedEvent(frame))
        return frame

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def shutdown(self) -> None:
        """Stop both cadences and wait for their tasks"""
        await self.tick_cadence.stop_async()
        await self.blink_cadence.stop_async()
        log.info("Preview cadences stopped")
