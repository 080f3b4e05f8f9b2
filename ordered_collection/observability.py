import json
import logging
from typing import Optional

from .config import Settings, load_alert_threshold, load_settings

LOGGER_NAME = "ordered_collection"


class Counter:
    """Minimal Prometheus-style counter."""

    def __init__(self, name: str, documentation: str):
        self.name = name
        self.documentation = documentation
        self.value = 0.0

    def inc(self, amount: float = 1.0) -> None:
        self.value += amount

    def reset(self) -> None:
        self.value = 0.0

    def render(self) -> str:
        return (
            f"# HELP {self.name} {self.documentation}\n"
            f"# TYPE {self.name} counter\n"
            f"{self.name} {self.value}\n"
        )


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=repr)


logger = logging.getLogger(LOGGER_NAME)

_handler: Optional[logging.Handler] = None
_settings: Optional[Settings] = None


def configure_logging(settings: Optional[Settings] = None) -> logging.Handler:
    """Attach a stream handler to the package logger.

    Calling it again replaces the previous handler rather than stacking a
    second one.
    """
    global _handler, _settings
    settings = settings or load_settings()
    _settings = settings
    if _handler is not None:
        logger.removeHandler(_handler)
    handler = logging.StreamHandler()
    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    logger.addHandler(handler)
    logger.setLevel(settings.log_level)
    _handler = handler
    return handler


# Counters
OUT_OF_BOUNDS_COUNTER = Counter(
    "out_of_bounds_total", "Number of get() calls with an invalid index"
)
EMPTY_REDUCE_COUNTER = Counter(
    "empty_reduce_total", "Number of reduce() calls on an empty collection without seed"
)

COUNTERS = [OUT_OF_BOUNDS_COUNTER, EMPTY_REDUCE_COUNTER]

def _alert_threshold() -> int:
    if _settings is not None:
        return _settings.error_alert_threshold
    return load_alert_threshold()


def _check_threshold(counter: Counter) -> None:
    threshold = _alert_threshold()
    if threshold and counter.value >= threshold:
        logger.warning(f"{counter.name} threshold {threshold} reached")


def inc_out_of_bounds() -> None:
    OUT_OF_BOUNDS_COUNTER.inc()
    _check_threshold(OUT_OF_BOUNDS_COUNTER)


def inc_empty_reduce() -> None:
    EMPTY_REDUCE_COUNTER.inc()
    _check_threshold(EMPTY_REDUCE_COUNTER)


def generate_metrics() -> bytes:
    return "".join(counter.render() for counter in COUNTERS).encode()


__all__ = [
    "JSONFormatter",
    "configure_logging",
    "inc_out_of_bounds",
    "inc_empty_reduce",
    "generate_metrics",
    "logger",
]
