"""
Catalog Parsing Module

Turns the text of a three-line element (3LE) resource into an ordered,
append-only catalog of orbital records.

A 3LE resource is a repetition of one name line followed by the two
element lines of a TLE. The element lines are not validated here: a
malformed set is accepted and is expected to fail later, when it is
propagated.
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

LAYOUT_3LE = "3le"
LAYOUT_2LE = "2le"

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")


class OrbitalRecord(BaseModel):
    """One catalog entry: a named two-line element set."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    line1: str
    line2: str


class Catalog:
    """
    Ordered sequence of OrbitalRecord.

    Records are only ever appended. The id of each record is its 0-based
    index at insertion time.
    """

    def __init__(self):
        self._records: List[OrbitalRecord] = []

    def append(self, name: str, line1: str, line2: str) -> OrbitalRecord:
        record = OrbitalRecord(
            id=str(len(self._records)), name=name, line1=line1, line2=line2
        )
        self._records.append(record)
        return record

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OrbitalRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> OrbitalRecord:
        return self._records[index]

    @property
    def records(self) -> Tuple[OrbitalRecord, ...]:
        return tuple(self._records)


def split_lines(text: str) -> List[str]:
    """Split text into stripped lines, dropping trailing blank lines."""
    lines = [line.strip() for line in _LINE_SPLIT.split(text)]
    while lines and not lines[-1]:
        lines.pop()
    return lines


def iter_element_sets(
    text: str, layout: str = LAYOUT_3LE
) -> Iterator[Tuple[str, str, str]]:
    """
    Yield (name, line1, line2) for every complete group in text.

    Groups whose element lines are empty are skipped. A trailing group with
    too few lines is ignored.

    Args:
        text: Raw catalog text
        layout: "3le" (name line + two element lines) or "2le" (element
            lines only, named after the catalog number)
    """
    if layout not in (LAYOUT_3LE, LAYOUT_2LE):
        raise ValueError(f"Unknown catalog layout: {layout!r}")

    lines = split_lines(text)
    size = 3 if layout == LAYOUT_3LE else 2

    for start in range(0, len(lines) - size + 1, size):
        group = lines[start:start + size]
        if layout == LAYOUT_3LE:
            name, line1, line2 = group
        else:
            line1, line2 = group
            name = _name_from_line1(line1)

        if not line1 or not line2:
            logger.debug(f"Skipping incomplete element set at line {start + 1}")
            continue

        yield name, line1, line2


def parse_catalog(
    text: str, layout: str = LAYOUT_3LE, catalog: Optional[Catalog] = None
) -> List[OrbitalRecord]:
    """
    Parse catalog text and append every complete element set.

    Args:
        text: Raw catalog text
        layout: "3le" or "2le"
        catalog: Catalog to append to (a new one is created if omitted)

    Returns:
        The records appended by this call, in input order
    """
    if catalog is None:
        catalog = Catalog()

    return [
        catalog.append(name, line1, line2)
        for name, line1, line2 in iter_element_sets(text, layout)
    ]


def count_groups(text: str, layout: str = LAYOUT_3LE) -> int:
    """Number of complete line groups in text, accepted or not."""
    size = 3 if layout == LAYOUT_3LE else 2
    return len(split_lines(text)) // size


def _name_from_line1(line1: str) -> str:
    catalog_number = line1[2:7].strip()
    return f"NORAD {catalog_number}" if catalog_number else "UNKNOWN"
