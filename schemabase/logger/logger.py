import atexit
import json
import logging
import logging.config
from logging.handlers import QueueListener
from pathlib import Path

logger = logging.getLogger("schemabase")

CONFIG_FILE = Path(__file__).parent / "logging_config.json"

_listener: QueueListener | None = None


def load_logging_config(level: str | None = None) -> dict:
    """Read logging_config.json, optionally overriding the console level."""
    with open(CONFIG_FILE, encoding="utf-8") as f:
        config = json.load(f)
    if level is not None:
        config["handlers"]["stderr"]["level"] = level.upper()
    return config


def setup_logger(level: str | None = None) -> None:
    """Configure the schemabase logger and start its queue listener.

    Calling it again replaces the previous configuration; the listener of the
    earlier call is stopped first so records are not written twice.
    """
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None

    logging.config.dictConfig(load_logging_config(level))
    queue_handler = logging.getHandlerByName("queue_handler")
    listener = getattr(queue_handler, "listener", None)
    if listener is not None:
        listener.start()
        atexit.register(listener.stop)
        _listener = listener
