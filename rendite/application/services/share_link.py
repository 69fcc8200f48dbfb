"""Share-link encoding.

A share link carries only the inputs and the display level, never computed
results: the receiver re-runs the projection. The payload is
``{"level": ..., "inputs": {...}}`` as UTF-8 JSON in standard base64, passed
in the ``i`` query parameter.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from rendite.core.exceptions import InvalidParameterError, ShareLinkError
from rendite.core.logging import get_logger
from rendite.core.settings import get_settings
from rendite.domain.models.parameters import ParameterSet
from rendite.application.services.validation import clamp_parameters

log = get_logger(__name__)

QUERY_PARAM = "i"
LEVELS = ("simple", "pro")


def encode_share_state(params: ParameterSet, level: str = "simple") -> str:
    """Encode inputs and level as a base64 token."""
    payload = {"level": level, "inputs": params.to_payload()}
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_share_state(token: str) -> tuple[ParameterSet, str]:
    """Decode a share token back into inputs and level.

    Fields missing from the token keep their zero-state defaults, and the
    merged inputs are clamped into the allowed ranges.

    Args:
        token: Base64 token as produced by :func:`encode_share_state`

    Returns:
        Tuple of (parameters, level)

    Raises:
        ShareLinkError: If the token is not valid base64/JSON or carries
            inputs of the wrong type.
    """
    # Unescaped "+" in a query string arrives as a space
    token = token.strip().replace(" ", "+")
    try:
        raw = base64.b64decode(token, validate=True).decode("utf-8")
        payload: Any = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        log.warning("share_link_undecodable", error=str(e))
        raise ShareLinkError("Share link could not be decoded") from e

    if not isinstance(payload, dict):
        raise ShareLinkError("Share link payload must be an object")

    try:
        params = ParameterSet.merged_onto_defaults(payload.get("inputs"))
    except InvalidParameterError as e:
        log.warning("share_link_invalid_inputs", error=str(e))
        raise ShareLinkError(f"Share link carries invalid inputs: {e.param_name}") from e

    level = payload.get("level")
    if level not in LEVELS:
        level = get_settings().default_level

    params = clamp_parameters(params)
    log.info("share_link_decoded", level=level)
    return params, level


def build_share_url(
    params: ParameterSet,
    level: str = "simple",
    base_url: str | None = None,
) -> str:
    """Build a full share URL; ``base_url`` defaults to the configured one."""
    parts = urlsplit(base_url or get_settings().share_base_url)
    query = urlencode({QUERY_PARAM: encode_share_state(params, level)})
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def parse_share_url(url: str) -> tuple[ParameterSet, str]:
    """Extract and decode the share token from a URL.

    Raises:
        ShareLinkError: If the URL has no share token or it is invalid.
    """
    values = parse_qs(urlsplit(url).query).get(QUERY_PARAM)
    if not values:
        raise ShareLinkError(f"URL has no '{QUERY_PARAM}' parameter")
    return decode_share_state(values[0])
