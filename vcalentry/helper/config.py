from __future__ import annotations

import logging
from io import StringIO

# ------------------------------------ Logging ---------------------------------
# default diagnostic sink, read_one(logger=...) replaces it per parse
logger = logging.getLogger("vcalentry")
if not logging.getLogger().handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(name)s %(filename)s:%(lineno)d %(levelname)s %(message)s"))
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


def get_buffer(x: str | StringIO = None) -> StringIO:
    """Wrap a payload string in a stream, streams are returned unchanged."""
    return StringIO(x) if isinstance(x, str) or x is None else x
