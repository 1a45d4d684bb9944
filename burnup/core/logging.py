import logging
import sys
from contextvars import ContextVar

# Context var naming the export currently being read (path or "<stdin>").
current_source: ContextVar[str] = ContextVar("current_source", default="")


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        return  # already configured
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s source=%(source)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(level.upper())
    # Ensure every LogRecord has a source attribute, including third-party records
    _install_log_record_factory()


def set_current_source(source: str | None) -> None:
    """Set the input source name attached to log lines.

    Use empty string when None provided so formatter output is stable (source=).
    """
    current_source.set(source or "")


def clear_current_source() -> None:
    current_source.set("")


_original_factory = logging.getLogRecordFactory()


def _install_log_record_factory() -> None:
    factory = logging.getLogRecordFactory()
    if getattr(factory, "__name__", "") == "_source_inject_factory":  # already installed
        return

    def _source_inject_factory(*args, **kwargs):  # type: ignore[no-untyped-def]
        record = _original_factory(*args, **kwargs)
        # Assign after creation so extra={"source": ...} never collides
        record.source = current_source.get()  # type: ignore[attr-defined]
        return record

    _source_inject_factory.__name__ = "_source_inject_factory"  # for idempotence check
    logging.setLogRecordFactory(_source_inject_factory)
