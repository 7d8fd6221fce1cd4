from __future__ import annotations

import logging

TRACE = 15
ELEMENT = 18
logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(ELEMENT, "ELEMENT")

LINE_BYTES = 16


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = _trace


def log_hex(lg: logging.Logger, prefix: str, data: bytes) -> None:
    """Log hex data at TRACE, wrapping at LINE_BYTES bytes per line."""
    if not lg.isEnabledFor(TRACE):
        return
    pad = " " * len(prefix)
    for i in range(0, len(data), LINE_BYTES):
        chunk = data[i : i + LINE_BYTES].hex(" ").upper()
        lg.trace("%s%s", prefix if i == 0 else pad, chunk)
