"""Informant file reading and writing.

An informant file holds zero or more records, one per line.  Each record is
three probabilities separated by whitespace:

    condition  coin1  coin2

where each probability is an integer or ``INT/INT``.  For example::

    1/2 1 0
    1/4 0 8/9

A malformed record rejects the whole file; the error names the file and the
1-based line number.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from pathlib import Path
from typing import Iterable, List, Optional, Union

from spymaster.channels import ConditionalTwoCoinChannel, TwoCoinChannel
from spymaster.config import FIELDS_PER_RECORD, FILE_ENCODING
from spymaster.rational import is_probability, parse_rational

logger = logging.getLogger(__name__)


class InformantFormatError(ValueError):
    """Raised when an informant record cannot be parsed."""

    def __init__(
        self,
        reason: str,
        path: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        location = "".join(
            f"{part}:" for part in (path, line_number) if part is not None
        )
        super().__init__(f"{location} {reason}" if location else reason)
        self.reason = reason
        self.path = path
        self.line_number = line_number


def parse_probability(token: str) -> Fraction:
    """Parse a single ``INT`` or ``INT/INT`` token that must lie in [0, 1]."""
    try:
        value = parse_rational(token)
    except ValueError as exc:
        raise InformantFormatError(f"invalid probability {token!r}: {exc}") from exc
    if not is_probability(value):
        raise InformantFormatError(f"probability {token!r} is not between 0 and 1")
    return value


def parse_informant(line: str, line_number: Optional[int] = None) -> ConditionalTwoCoinChannel:
    """Parse one ``condition coin1 coin2`` record."""
    tokens = line.split()
    if len(tokens) != FIELDS_PER_RECORD:
        raise InformantFormatError(
            f"expected {FIELDS_PER_RECORD} probabilities, got {len(tokens)}",
            line_number=line_number,
        )

    try:
        condition, coin1, coin2 = (parse_probability(token) for token in tokens)
        return ConditionalTwoCoinChannel(condition, TwoCoinChannel(coin1, coin2))
    except InformantFormatError as exc:
        raise InformantFormatError(exc.reason, line_number=line_number) from exc


def read_informants(path: Union[str, Path]) -> List[ConditionalTwoCoinChannel]:
    """Return the informants in *path*, in file order.

    Raises:
        InformantFormatError: if any line is not a valid record or not
            decodable text.
        OSError: if the file cannot be read.
    """
    informants: List[ConditionalTwoCoinChannel] = []
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, start=1):
            try:
                line = raw.decode(FILE_ENCODING)
            except UnicodeDecodeError as exc:
                raise InformantFormatError(
                    f"not valid {FILE_ENCODING} text: {exc.reason}",
                    path=str(path),
                    line_number=line_number,
                ) from exc
            try:
                informants.append(parse_informant(line, line_number))
            except InformantFormatError as exc:
                raise InformantFormatError(exc.reason, path=str(path), line_number=line_number) from exc

    logger.debug("read %d informant(s) from %s", len(informants), path)
    return informants


def format_informant(informant: ConditionalTwoCoinChannel) -> str:
    """Render *informant* as a file record, e.g. ``"1/4 0 8/9"``."""
    channel = informant.channel
    return f"{informant.condition} {channel.coin1} {channel.coin2}"


def write_informants(
    path: Union[str, Path],
    informants: Iterable[ConditionalTwoCoinChannel],
) -> None:
    """Write *informants* to *path*, one record per line."""
    lines = [format_informant(inf) + "\n" for inf in informants]
    with open(path, "w", encoding=FILE_ENCODING) as f:
        f.writelines(lines)
    logger.debug("wrote %d informant(s) to %s", len(lines), path)
