"""Raw RFC822 header block parsing."""

from __future__ import annotations

import re

_HEADER_LINE = re.compile(r"^([^:\s][^:]*):\s*(.*)$")


def parse_headers(raw: str | None) -> dict[str, str]:
    """Map lowercased header names to trimmed, unfolded values.

    Lines starting with whitespace continue the previous header and are
    joined with a single space. Lines that neither continue a header nor
    look like ``name: value`` are ignored. Repeated headers keep the last
    value.
    """

    headers: dict[str, str] = {}
    if not raw:
        return headers

    current_name = ""
    current_value = ""
    for line in re.split(r"\r?\n", raw):
        if not line.strip():
            continue
        if line[0] in " \t":
            if current_name:
                current_value = f"{current_value} {line.strip()}"
            continue
        if current_name:
            headers[current_name] = current_value.strip()
        match = _HEADER_LINE.match(line)
        if match:
            current_name = match.group(1).strip().lower()
            current_value = match.group(2)
        else:
            current_name = ""
            current_value = ""

    if current_name:
        headers[current_name] = current_value.strip()
    return headers
