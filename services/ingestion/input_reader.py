"""Input reader: turns delimiter-separated lines into PageSpec records."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from config.models import PageSpec

logger = logging.getLogger(__name__)


class InputReader:
    """
    Parses page lines such as `John Lewis,homepage,https://johnlewis.com`.

    Only the trailing URL may contain the delimiter: every field from
    `url_field` onwards is joined back into the URL. With `url_field` unset
    the URL is the last field.
    """

    def __init__(self, delimiter: str = ",", comment_marker: str = "#", url_field: Optional[int] = None):
        self.delimiter = delimiter
        self.comment_marker = comment_marker
        self.url_field = url_field

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def read_file(self, path: str) -> List[PageSpec]:
        """Read and parse an input file."""
        input_path = Path(path)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        text = input_path.read_text(encoding="utf-8")
        pages = self.parse_lines(text.splitlines())
        logger.info(f"Loaded {len(pages)} page(s) from {path}")
        return pages

    def parse_lines(self, lines: Iterable[str]) -> List[PageSpec]:
        pages = []
        for line in lines:
            line = line.strip()
            if not line or (self.comment_marker and line.startswith(self.comment_marker)):
                continue
            pages.append(self.parse_line(line))
        return pages

    def parse_line(self, line: str) -> PageSpec:
        raw_fields = line.split(self.delimiter)
        start = len(raw_fields) - 1 if self.url_field is None else self.url_field

        head = [f.strip() for f in raw_fields[:start]]
        url = self.delimiter.join(raw_fields[start:]).strip()

        if not url:
            logger.warning(f"No URL found in input line: {line}")

        return PageSpec(raw_line=line, metadata_fields=tuple(head) + (url,), url=url)
