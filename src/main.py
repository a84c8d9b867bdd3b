import logging
import signal
import sys
from dataclasses import replace
from typing import Optional

from app_config import (
    AppConfig,
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from server import ServerConfigurationError, UIServer, UIServerConfig
from state import AppState, AppStateStore
from storage import JsonStateRepository


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("baby_tracker")


def setup_signal_handlers(engine: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("baby_tracker").info("%s received, stopping...", signal_name)
        engine.stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def seed_reminder_intervals(state: AppState, app_config: AppConfig) -> AppState:
    """Apply the configured reminder intervals to a state that has never been saved."""
    settings = app_config.reminders
    intervals = {
        "feeding": settings.feeding,
        "sleep": settings.sleep,
        "diaper": settings.diaper,
    }
    state.reminders = replace(state.reminders, intervals_minutes=intervals)
    return state


def main() -> int:
    """Run the tracker runtime with its optional local UI server."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    repository = JsonStateRepository(
        app_config.storage.data_file,
        logger=logging.getLogger("storage"),
    )
    is_first_run = not repository.path.exists()
    state = repository.load()
    if is_first_run:
        state = seed_reminder_intervals(state, app_config)

    store = AppStateStore(state, logger=logging.getLogger("state"))
    store.subscribe(repository.save)

    ui_server: Optional[UIServer] = None
    try:
        ui_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        return 1

    if ui_config.enabled:
        ui_server = UIServer(config=ui_config, logger=logging.getLogger("ui_server"))
        try:
            ui_server.start()
        except RuntimeError as error:
            logger.error("UI server startup failed: %s", error)
            return 1
    else:
        logger.info("UI server disabled via ui_server.enabled=false")

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            app_config=app_config,
            store=store,
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
