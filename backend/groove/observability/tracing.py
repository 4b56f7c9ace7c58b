"""Tracing utilities wrapping Opik."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from groove.observability import client as opik_client

logger = logging.getLogger(__name__)


def get_opik_client():
    return opik_client.get_opik_client()


def _clean_metadata(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {key: value for key, value in (metadata or {}).items() if value is not None}


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    user_id: Optional[object] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional[Any]]:
    """
    Open an Opik trace around a unit of work.

    Yields the trace handle, or None when Opik is disabled, so callers can
    attach extra metadata with ``span.update(...)`` only when tracing is live.
    Errors raised inside the block are recorded on the trace and re-raised.
    """
    client = get_opik_client()
    handle = None

    if client:
        trace_metadata = _clean_metadata(metadata)
        if user_id is not None:
            trace_metadata.setdefault("user_id", str(user_id))
        if request_id:
            trace_metadata.setdefault("request_id", request_id)
        try:
            handle = client.trace(name=name, metadata=trace_metadata or None)
        except Exception as exc:  # pragma: no cover - SDK failure
            logger.debug("Unable to start Opik trace %s: %s", name, exc)
            handle = None

    try:
        yield handle
    except Exception as exc:
        if handle:
            try:
                handle.update(error_info={"exception_type": type(exc).__name__, "message": str(exc)})
            except Exception:  # pragma: no cover
                logger.debug("Failed to attach error info to Opik trace %s", name, exc_info=True)
        raise
    finally:
        if handle:
            try:
                handle.end()
            except Exception:  # pragma: no cover
                logger.debug("Failed to close Opik trace %s cleanly", name, exc_info=True)
