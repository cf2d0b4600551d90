"""
sbcleans.naming - Export filename parsing and file pattern helpers.

Export filenames are underscore-delimited with the sequence token as the
second field and the version as the last field:

    Show_SQ010_Something_v03  ->  sequence "010", version "v03"

File patterns use the storyboard host's tokens: %q sequence, %s scene,
%p panel, each with a zero-padding width digit (0 means no padding).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sbcleans.exceptions import FilenameError

RE_PATTERN_TOKEN = re.compile(r"%(\d)([qsp])")


@dataclass(frozen=True)
class ParsedName:
    """Tokens extracted from an export filename."""

    sequence: str
    version: str


def validate_file_name(base_name: str, placeholder: str = "Untitled") -> bool:
    """Return False if the name is the host's default placeholder."""
    return bool(base_name) and base_name != placeholder


def parse_file_name(base_name: str, prefix: str = "SQ") -> ParsedName:
    """Split an export filename into sequence and version tokens.

    Args:
        base_name: Filename without directory or extension
        prefix: Literal prefix stripped from the sequence token

    Returns:
        ParsedName with sequence and version

    Raises:
        FilenameError: If the name has fewer than two underscore-separated fields
    """
    tokens = base_name.split("_")
    if len(tokens) < 2:
        raise FilenameError(
            f"Cannot parse '{base_name}': expected <show>_{prefix}<sequence>_..._<version>"
        )
    sequence = tokens[1].replace(prefix, "", 1)
    version = tokens[-1]
    return ParsedName(sequence=sequence, version=version)


def movie_pattern(version: str) -> str:
    """File pattern for per-scene movie clips."""
    return f"SQ%0q_Sc%0s_{version}"


def panel_pattern(version: str) -> str:
    """File pattern for conformation panel images."""
    return f"SQ%0q_Sc%0s_Pn%0p_{version}"


def expand_pattern(
    pattern: str,
    sequence: str = "",
    scene: str = "",
    panel: str = "",
) -> str:
    """Substitute %q, %s and %p tokens in a host file pattern.

    Args:
        pattern: Pattern such as "SQ%0q_Sc%0s_v03"
        sequence: Sequence name
        scene: Scene name
        panel: Panel name

    Returns:
        Expanded filename stem
    """
    values = {"q": sequence, "s": scene, "p": panel}

    def _replace(match: re.Match[str]) -> str:
        width = int(match.group(1))
        return values[match.group(2)].zfill(width)

    return RE_PATTERN_TOKEN.sub(_replace, pattern)
