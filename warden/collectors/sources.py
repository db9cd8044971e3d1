"""
Warden Line Sources
====================

Line-oriented input collectors for the registry and the scan dump.

Both sources are consumed strictly sequentially, one line at a time:
the scan dump is never loaded into memory as a whole.  A location that
cannot be opened, fetched or read to the end raises
:class:`~warden.core.errors.SourceUnavailable`; what to do about it is
the caller's decision.  A UTF-8 byte-order mark at the start of a
source is dropped.

Supported locations:
    - Registry:  local file path, or http(s) URL fetched with WardenHTTP
    - Scan dump: local file path, or ``-`` for standard input
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Generator, Iterable, Iterator, Optional

from shared.logger import WardenLogger
from shared.network import WardenHTTP, WardenHTTPError, is_url

from warden.core.errors import SourceUnavailable

logger = WardenLogger("warden.collectors.sources")

STDIN_MARKER = "-"
_BOM = "\ufeff"


def _read_lines(lines: Iterable[str], source: str) -> Iterator[str]:
    """Yield *lines* without terminators and without a leading BOM.

    Read errors while iterating become SourceUnavailable.
    """
    try:
        for number, line in enumerate(lines):
            if number == 0 and line.startswith(_BOM):
                line = line[len(_BOM):]
            yield line.rstrip("\r\n")
    except (OSError, UnicodeDecodeError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        raise SourceUnavailable(source, f"read error: {reason}") from exc


def _open_text(path: str, encoding: str) -> IO[str]:
    try:
        return open(Path(path), "r", encoding=encoding, errors="replace")
    except OSError as exc:
        raise SourceUnavailable(path, exc.strerror or str(exc)) from exc


def _fetch_text(url: str, http: Optional[WardenHTTP]) -> str:
    client = http or WardenHTTP()
    try:
        return client.fetch_text(url)
    except WardenHTTPError as exc:
        raise SourceUnavailable(url, str(exc)) from exc
    finally:
        if http is None:
            client.close()


@contextmanager
def open_registry_source(
    source: str,
    *,
    http: Optional[WardenHTTP] = None,
    encoding: str = "utf-8",
) -> Generator[Iterator[str], None, None]:
    """Open the authorized-AP registry and yield its lines.

    Args:
        source: Local path or http(s) URL.
        http: Client used for URLs; a temporary one is created if ``None``.
        encoding: Text encoding of a local file.

    Yields:
        Iterator over the lines of the source, without line terminators.

    Raises:
        SourceUnavailable: If the file cannot be opened or the URL fetched.
    """
    if is_url(source):
        logger.debug("Fetching registry from %s", source)
        text = _fetch_text(source, http)
        yield _read_lines(text.splitlines(), source)
        return

    logger.debug("Reading registry from %s", source)
    fh = _open_text(source, encoding)
    with fh:
        yield _read_lines(fh, source)


@contextmanager
def open_scan_dump(
    source: str,
    *,
    encoding: str = "utf-8",
) -> Generator[Iterator[str], None, None]:
    """Open a scan dump and yield its lines lazily.

    Args:
        source: Path to a saved ``iw <dev> scan`` dump, or ``-`` for stdin.
        encoding: Text encoding; undecodable bytes are replaced.

    Raises:
        SourceUnavailable: If the file cannot be opened.
    """
    if source == STDIN_MARKER:
        logger.debug("Reading scan dump from standard input")
        yield _read_lines(sys.stdin, source)
        return

    logger.debug("Reading scan dump from %s", source)
    fh = _open_text(source, encoding)
    with fh:
        yield _read_lines(fh, source)
