from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PageCount:
    """Page count of a paginated document and the absolute path it was read from."""

    page_count: int
    resolved_path: Path
