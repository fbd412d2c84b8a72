"""Decoding of the per-frame page-count output of ``identify -format %n``.

The tool prints the total page count once per frame with no separator, so a
3-page document yields ``"333"`` and a 10-page one ``"10"`` ten times over.
"""

from slipstage.raster.exceptions import PageCountUndetermined


def decode_page_count(output: str) -> int:
    """Recover N from ``str(N)`` repeated N times.

    The candidate prefix grows one character at a time; the first prefix
    that, repeated ``int(prefix)`` times, rebuilds the whole text wins. A
    single-character read would misparse ``"1010..."`` as 1.

    Raises:
        PageCountUndetermined: on empty output or when no prefix fits.
    """
    lines = output.strip().splitlines()
    text = lines[0].strip() if lines else ""
    if not text:
        raise PageCountUndetermined("Page-count output is empty")

    for length in range(1, len(text) + 1):
        prefix = text[:length]
        if not prefix.isdecimal():
            break
        count = int(prefix)
        if count < 1 or count * length != len(text):
            continue
        if prefix * count == text:
            return count

    raise PageCountUndetermined(f"Failed to parse page count from output {text!r}")
