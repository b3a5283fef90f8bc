"""
Chat-completion HTTP client with bounded retries, timeouts, and error envelopes.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, Tuple

import requests

logger = logging.getLogger(__name__)

_RETRYABLE = (requests.exceptions.Timeout, requests.exceptions.ConnectionError)


def _classify(exc: Exception | None) -> str:
    if exc is None:
        return "ProviderError"
    if isinstance(exc, requests.exceptions.Timeout):
        return "ProviderTimeout"
    if isinstance(exc, requests.exceptions.ConnectionError):
        return "ProviderConnectionError"
    if isinstance(exc, (requests.exceptions.HTTPError, requests.exceptions.JSONDecodeError, ValueError)):
        return "ProviderBadResponse"
    return exc.__class__.__name__


def chat_completion_request(
    url: str,
    payload: Dict[str, Any],
    api_key: str,
    *,
    connect_timeout: float = 5.0,
    read_timeout: float = 30.0,
    retries: int = 1,
    backoff: Tuple[float, ...] = (0.5, 1.0),
    trace_id: str | None = None,
) -> Dict[str, Any]:
    """
    POST a chat-completion payload with a bearer token.

    Only transport errors (timeouts, refused connections) are retried; an HTTP
    error status or an unparsable body fails immediately.

    Returns an envelope: {"ok": bool, "data": dict|None, "error": {...}|None, "trace_id": str, "latency_ms": float|None}
    """
    tid = trace_id or uuid.uuid4().hex[:8]
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }

    last_err: Exception | None = None
    latency_ms: float | None = None
    for attempt in range(retries + 1):
        try:
            started = time.time()
            resp = requests.post(url, json=payload, headers=headers, timeout=(connect_timeout, read_timeout))
            latency_ms = (time.time() - started) * 1000
            resp.raise_for_status()
            data = resp.json()
            return {"ok": True, "data": data, "error": None, "trace_id": tid, "latency_ms": latency_ms}
        except _RETRYABLE as exc:
            last_err = exc
            logger.warning(
                "chat_completion_request failed (attempt %s/%s, trace_id=%s): %s", attempt + 1, retries + 1, tid, exc
            )
            if attempt < retries:
                time.sleep(backoff[attempt] if attempt < len(backoff) else backoff[-1])
        except (requests.exceptions.RequestException, ValueError) as exc:
            last_err = exc
            logger.warning("chat_completion_request rejected (trace_id=%s): %s", tid, exc)
            break

    error_type = _classify(last_err)
    error_obj = {
        "type": error_type,
        "message": str(last_err) if last_err else "Unknown provider error",
        "trace_id": tid,
        "where": url,
    }
    logger.error(
        "chat_completion_request failed (trace_id=%s, url=%s, model=%s, type=%s)",
        tid,
        url,
        payload.get("model"),
        error_type,
    )
    return {"ok": False, "data": None, "error": error_obj, "trace_id": tid, "latency_ms": latency_ms}


def extract_message_content(data: Any) -> str | None:
    """Return ``choices[0].message.content`` stripped, or None when absent or empty."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str):
        return None
    content = content.strip()
    return content or None
