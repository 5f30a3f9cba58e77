"""Parsing helpers for free-form model replies and uploaded files."""

import re
from typing import Optional, Tuple

from medcrew.models.patient import ImagePayload
from medcrew.models.triage import TriageRoute


_SPECIALTY_MARKER = re.compile(
    r"^(.*?)\bSPECIALTY[ \t*]*:[ \t*]*(.*?)[ \t]*$", re.IGNORECASE | re.MULTILINE
)
# Text before a marker that is only list numbering or markdown decoration.
_MARKER_PREFIX_NOISE = re.compile(r"^[ \t*_#>-]*(?:\d+[.)])?[ \t*_#>-]*$")
_DATA_URL = re.compile(r"^data:([^;,]+)(?:;[^,]*)?;base64,(.+)$", re.DOTALL)


def strip_md_fences(text: str) -> str:
    """Strip markdown code fences that the LLM sometimes wraps JSON in.

    Handles patterns like:
        ```json\\n{...}\\n```
        ```\\n{...}\\n```
    """
    stripped = text.strip()
    match = re.match(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", stripped, re.DOTALL)
    if match:
        return match.group(1).strip()
    return stripped


def extract_specialty(text: str) -> Tuple[str, Optional[str]]:
    """
    Split a recommendation into display text and the trailing specialty.

    The `SPECIALTY:` marker is matched case-insensitively anywhere on a line,
    e.g. `4. SPECIALTY: Cardiology` or after the disclaimer sentence. The
    first marker wins. On every marker line, the marker and the rest of the
    line are removed; text before it is kept unless it is only numbering or
    markdown. An empty value yields None.

    Returns:
        (clean_text, specialty)
    """
    match = _SPECIALTY_MARKER.search(text)
    if not match:
        return text.strip(), None

    specialty = match.group(2).strip().strip("[]*").strip() or None
    clean_text = _SPECIALTY_MARKER.sub(_text_before_marker, text).strip()
    return clean_text, specialty


def _text_before_marker(match: re.Match) -> str:
    prefix = match.group(1)
    if _MARKER_PREFIX_NOISE.match(prefix):
        return ""
    return prefix.rstrip(" \t*_#>")


def parse_data_url(data_url: str) -> ImagePayload:
    """
    Split a `data:<mime>;base64,<payload>` URL.

    Raises:
        ValueError: If the URL is not a base64 data URL
    """
    match = _DATA_URL.match(data_url.strip())
    if not match:
        raise ValueError("Invalid image data URL.")
    return ImagePayload(mime_type=match.group(1), data=match.group(2))


def is_image_mime(mime_type: str) -> bool:
    return mime_type.lower().startswith("image/")


def parse_route(reply: str) -> TriageRoute:
    """Router reply → route. Anything without TRIAGE (any case) means CLARIFY."""
    if "TRIAGE" in reply.upper():
        return TriageRoute.TRIAGE
    return TriageRoute.CLARIFY
