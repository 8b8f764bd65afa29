__version__ = "1.0.0"

from . import (
    canon,
    exceptions,
    types,
    filenames,
    ingest,
    scan,
    summary,
    formats,
    dashboard,
    aggregate,
    config,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "filenames",
    "ingest",
    "scan",
    "summary",
    "formats",
    "dashboard",
    "aggregate",
    "config",
]
