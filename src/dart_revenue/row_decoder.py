"""
Row decoder for tab-delimited DART financial-statement extracts.

Extract files are published in the legacy CP949 codec with one statement
line per row. Only five columns are consumed:

    [1]  entity code, usually bracket-wrapped (``[005930]``)
    [2]  entity name
    [10] account identifier (``ifrs-full_Revenue``)
    [11] account label (``매출액``)
    [12] amount for the current period, thousands-separated
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .data_models import AmountParse, FiledRow


logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cp949"
MIN_FIELD_COUNT = 13

ENTITY_CODE_COLUMN = 1
ENTITY_NAME_COLUMN = 2
ACCOUNT_ID_COLUMN = 10
ACCOUNT_LABEL_COLUMN = 11
AMOUNT_COLUMN = 12


def normalize_entity_code(raw: str) -> str:
    """Strip surrounding whitespace and brackets from an entity code."""
    return raw.strip().replace("[", "").replace("]", "").strip()


def decode_line(line: str) -> Optional[FiledRow]:
    """
    Decode one already-decoded text line into a :class:`FiledRow`.

    Args:
        line: Text line without its trailing newline

    Returns:
        Parsed row, or None when the line is not a usable data row
    """
    if not line.strip():
        return None

    columns = line.rstrip("\r\n").split("\t")
    if len(columns) < MIN_FIELD_COUNT:
        return None

    entity_code = normalize_entity_code(columns[ENTITY_CODE_COLUMN])
    account_id = columns[ACCOUNT_ID_COLUMN].strip()
    amount_text = columns[AMOUNT_COLUMN].strip()

    if not entity_code or not account_id or not amount_text:
        return None

    parsed = AmountParse.parse(amount_text)
    if not parsed.ok:
        logger.debug("Skipping row for %s/%s: %s", entity_code, account_id, parsed.error)
        return None

    return FiledRow(
        entity_code=entity_code,
        entity_name=columns[ENTITY_NAME_COLUMN].strip(),
        account_id=account_id,
        account_label=columns[ACCOUNT_LABEL_COLUMN].strip(),
        amount=parsed.value,
    )


def iter_filing_rows(path: Path, encoding: str = DEFAULT_ENCODING) -> Iterator[FiledRow]:
    """
    Stream the usable rows of one filing extract.

    The file is read line by line so large extracts never sit in memory
    whole. Undecodable bytes are replaced rather than aborting the scan.

    Args:
        path: Filing extract path
        encoding: Source codec of the extract

    Yields:
        Decoded rows in file order
    """
    skipped = 0
    with Path(path).open("r", encoding=encoding, errors="replace", newline="") as handle:
        for line in handle:
            row = decode_line(line)
            if row is None:
                skipped += 1
                continue
            yield row

    if skipped:
        logger.debug("Skipped %d non-data lines in %s", skipped, Path(path).name)
