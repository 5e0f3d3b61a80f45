"""Workbook ingestion.

Example:
    >>> from pathlib import Path
    >>> from venue_core.ingest import ingest_workbook
    >>>
    >>> ingest_workbook(Path("VENUE_DATA.xlsx"), Path("data"))
"""

from venue_core.ingest.workbook import ingest_workbook, read_workbook

__all__ = ["ingest_workbook", "read_workbook"]
