"""nmcli ``--mode multiline`` output parsing.

In multiline mode nmcli prints one ``KEY: VALUE`` pair per line and emits
the same key set, in the same order, once per item.  There is no explicit
separator between items, so the reappearance of a key already present in
the current record is what starts the next record::

    NAME:    Home
    TYPE:    wifi
    NAME:    Office      <- NAME seen again, new record
    TYPE:    ethernet

If nmcli ever omits a field from one item, neighbouring items merge.  The
rule is kept as is because it is the only boundary signal the tool gives.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from nmcliwrap.common import Record

logger = logging.getLogger(__name__)


def _split_multiline_line(line: str) -> tuple[str, str] | None:
    """Split ``KEY: VALUE`` at the first colon and trim both halves.

    Returns ``None`` for blank lines and lines without a colon.
    """
    if not line.strip():
        return None
    key, sep, value = line.partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def parse_multiline_output(lines: Iterable[str]) -> list[Record]:
    """Parse nmcli multiline output into a list of records.

    Args:
        lines: Output lines in the order nmcli printed them.

    Returns:
        One ``dict`` per item, in emission order.  Values keep any colons
        after the first one (BSSIDs, IPv6 addresses).
    """
    records: list[Record] = []
    current: Record | None = None

    for line in lines:
        pair = _split_multiline_line(line)
        if pair is None:
            continue
        key, value = pair

        if current is None or key in current:
            current = {}
            records.append(current)
        current[key] = value

    logger.debug("parsed %d record(s)", len(records))
    return records
