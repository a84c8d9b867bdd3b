"""Runtime orchestration loop for scheduler ticks and queued UI commands."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Mapping, Optional

from app_config import AppConfig
from contracts.ui_protocol import EVENT_ERROR, STATE_ERROR, STATE_IDLE, STATE_TRACKING
from growth import GrowthTracker
from health import HealthTracker
from history import LogBook
from milk_stash import MilkStash
from notifications import UINotificationSink
from reminders import ReminderScheduler
from server.service import UIServer
from shared.defaults import now_ms
from state import AppState, AppStateStore
from tracker import ActiveTimerController
from tracker.constants import ACTION_SYNC, REASON_STARTUP

from .command_dispatch import RuntimeCommandDispatcher
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[["RuntimeEngine"], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    store: AppStateStore
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks
    clock: Callable[[], int] = now_ms


class RuntimeEngine:
    """Main runtime loop: one scheduler tick per interval, UI commands in between.

    Commands arrive from the UI server thread through a queue and are
    executed on the loop thread, so every state mutation happens here.
    """

    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        config = bootstrap.app_config
        store = bootstrap.store

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._controller = ActiveTimerController(
            store,
            clock=bootstrap.clock,
            snooze_seconds=config.tracker.snooze_minutes * 60,
            min_log_duration_seconds=config.tracker.min_log_duration_seconds,
            logger=logging.getLogger("tracker"),
        )
        self._scheduler = ReminderScheduler(
            store,
            self._controller,
            UINotificationSink(
                self._ui,
                enabled=config.notifications.enabled,
                logger=logging.getLogger("notifications"),
            ),
            clock=bootstrap.clock,
            cooldown_seconds=config.reminders.cooldown_minutes * 60,
            logger=logging.getLogger("reminders"),
        )
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            controller=self._controller,
            log_book=LogBook(store, clock=bootstrap.clock, logger=logging.getLogger("history")),
            scheduler=self._scheduler,
            growth=GrowthTracker(store, logger=logging.getLogger("growth")),
            milk_stash=MilkStash(
                store,
                clock=bootstrap.clock,
                logger=logging.getLogger("milk_stash"),
            ),
            health=HealthTracker(
                store,
                clock=bootstrap.clock,
                logger=logging.getLogger("health"),
            ),
            ui=self._ui,
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                logger=self._logger,
                ui=self._ui,
            )
        )

        self._tick_interval_seconds = config.reminders.tick_interval_seconds
        self._commands: Queue[Mapping[str, Any]] = Queue()
        self._stop_requested = threading.Event()
        self._published_state: Optional[AppState] = None
        self._unsubscribe = store.subscribe(self._on_state_changed)

        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_message_handler(self.enqueue_command)

    @property
    def dispatcher(self) -> RuntimeCommandDispatcher:
        return self._dispatcher

    def enqueue_command(self, command: Mapping[str, Any]) -> None:
        """Thread-safe entry point for commands coming from UI clients."""
        self._commands.put(command)

    def stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        self._publish_startup_sync()
        self._bootstrap.hooks.setup_signal_handlers(self)

        try:
            self._logger.info(
                "Tracker running (tick every %.1fs)",
                self._tick_interval_seconds,
            )
            while not self._stop_requested.is_set():
                deadline = time.monotonic() + self._tick_interval_seconds
                self.tick()
                self._drain_commands(deadline)
            self._logger.info("Runtime loop stopped.")
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def tick(self) -> None:
        tick = self._scheduler.tick()
        self._tick_processor.handle_tick(tick, self._controller.snapshot())

    def _drain_commands(self, deadline: float) -> None:
        while not self._stop_requested.is_set():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            try:
                command = self._commands.get(timeout=remaining)
            except Empty:
                return
            self._execute_command(command)

    def _execute_command(self, command: Mapping[str, Any]) -> None:
        try:
            self._dispatcher.handle_command(command)
        except Exception as error:
            self._logger.error("Command handling failed: %s", error, exc_info=True)
            self._ui.publish(
                EVENT_ERROR,
                state=STATE_ERROR,
                message=f"Command handling failed: {error}",
            )

    def _publish_idle_state(self) -> None:
        snapshot = self._controller.snapshot()
        self._ui.publish_state(
            STATE_TRACKING if snapshot.is_active else STATE_IDLE,
            message=self._dispatcher.active_runtime_message(),
        )

    def _publish_startup_sync(self) -> None:
        self._ui.publish_timer_update(
            self._controller.snapshot(),
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )
        self._on_state_changed(self._bootstrap.store.snapshot())

    def _on_state_changed(self, state: AppState) -> None:
        previous = self._published_state
        self._published_state = state
        if previous is None or previous.logs != state.logs:
            self._ui.publish_logs(state.logs)
        if previous is None or previous.reminders != state.reminders:
            self._ui.publish_reminders(state.reminders)
        if previous is None or previous.milk_stash != state.milk_stash:
            self._ui.publish_milk_stash(state.milk_stash)
        if previous is None or previous.health != state.health:
            self._ui.publish_health(state.health)
        if previous is None or previous.active_timer != state.active_timer:
            self._publish_idle_state()

    def _shutdown(self) -> None:
        self._unsubscribe()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            ui_server.set_message_handler(None)
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
