from .fetch import FetchError, fetch_sheet_text, read_local_text
from .pipeline import ingest, ingest_text

__all__ = [
    "FetchError",
    "fetch_sheet_text",
    "ingest",
    "ingest_text",
    "read_local_text",
]
