"""Application services."""

from .exporter import ResultExporter, render_pdf
from .share_link import decode_share_state, encode_share_state
from .validation import clamp_parameters, is_ready, resolve_equity

__all__ = [
    "ResultExporter",
    "render_pdf",
    "encode_share_state",
    "decode_share_state",
    "clamp_parameters",
    "is_ready",
    "resolve_equity",
]
