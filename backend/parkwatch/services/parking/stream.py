"""
Extract the parkingLots payload from the page's streamed component body.

The body is newline-delimited; one line looks like
    5:["$","$L1c",null,{"parkingLots":[{...}, ...], ...}]
The position (prefix "5:", element 3) is observed, not documented, so the scan is defensive:
a candidate that fails to decode or shape-check is skipped and the next candidate is tried.
"""
import json
import logging
from typing import Any, Iterator

from parkwatch.core.constants import STREAM_LINE_PREFIX, STREAM_MARKER, STREAM_PAYLOAD_INDEX
from parkwatch.core.errors import DecodeError

logger = logging.getLogger(__name__)


def candidate_lines(body: str, prefix: str = STREAM_LINE_PREFIX, marker: str = STREAM_MARKER) -> Iterator[str]:
    """Lines that start with prefix and mention marker, prefix stripped."""
    for line in (body or "").split("\n"):
        line = line.rstrip("\r")
        if line.startswith(prefix) and marker in line:
            yield line[len(prefix):]


def decode_line(text: str) -> Any:
    """JSON-decode one candidate. Raises DecodeError."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise DecodeError(str(e)) from e


def payload_lots(decoded: Any, marker: str = STREAM_MARKER) -> list[Any] | None:
    """decoded[3][marker] when decoded is a list of >= 4 and that property is a list; else None."""
    if not isinstance(decoded, list) or len(decoded) <= STREAM_PAYLOAD_INDEX:
        return None
    container = decoded[STREAM_PAYLOAD_INDEX]
    if not isinstance(container, dict):
        return None
    lots = container.get(marker)
    if not isinstance(lots, list):
        return None
    return lots


def extract_parking_lots(
    body: str,
    *,
    prefix: str = STREAM_LINE_PREFIX,
    marker: str = STREAM_MARKER,
) -> list[Any] | None:
    """
    Raw lot entries from the first candidate line that decodes and shape-checks.
    Returns None when no line qualifies. Never raises.
    """
    for n, text in enumerate(candidate_lines(body, prefix, marker)):
        try:
            decoded = decode_line(text)
        except DecodeError as e:
            logger.debug("Skip candidate line %s: %s", n, e)
            continue
        lots = payload_lots(decoded, marker)
        if lots is None:
            logger.debug("Skip candidate line %s: unexpected shape", n)
            continue
        return lots
    return None
