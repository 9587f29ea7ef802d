"""Generate rules from freedesktop ``.desktop`` entries."""

from __future__ import annotations

import configparser
import logging
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from runrunrun.constants import DESKTOP_MIME_KEYS, DESKTOP_SECTION, DESKTOP_SUFFIX
from runrunrun.errors import ConfigFileError
from runrunrun.utils import iter_tree

logger = logging.getLogger(__name__)

_FIELD_CODE_RE = re.compile(r"""%%|(["']?)%[fFuUdDnNickvm]\1""")


@dataclass(frozen=True)
class DesktopEntry:
    path: Path
    exec_command: str
    mime_types: tuple[str, ...]


def strip_field_codes(exec_line: str) -> str:
    """Drop desktop-entry field codes (``%f``, ``%U``, ...) from an Exec value."""
    command = _FIELD_CODE_RE.sub(
        lambda match: "%" if match.group(0) == "%%" else "", exec_line
    )
    return " ".join(command.split())


def extensions_for(mime_type: str) -> list[str]:
    extensions: list[str] = []
    for extension in mimetypes.guess_all_extensions(mime_type, strict=False):
        name = extension.lstrip(".")
        if name and name not in extensions:
            extensions.append(name)
    return extensions


def read_desktop_entry(path: Path) -> Optional[DesktopEntry]:
    """Read ``path``; return None when it lacks an Exec or MimeType field."""
    parser = configparser.ConfigParser(
        interpolation=None, strict=False, delimiters=("=",), comment_prefixes=("#",)
    )
    parser.optionxform = str  # type: ignore[assignment]
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigFileError(path, f"Invalid encoding ({exc.reason})") from exc
    try:
        parser.read_string(text, source=str(path))
    except configparser.Error as exc:
        raise ConfigFileError(path, f"Invalid desktop entry ({exc.message})") from exc

    if not parser.has_section(DESKTOP_SECTION):
        logger.debug("skipping %s: no [%s] section", path, DESKTOP_SECTION)
        return None
    section = parser[DESKTOP_SECTION]

    exec_line = section.get("Exec", "").strip()
    mime_line = ""
    for key in DESKTOP_MIME_KEYS:
        mime_line = section.get(key, "").strip()
        if mime_line:
            break

    if not exec_line or not mime_line:
        logger.debug("skipping %s: missing Exec or MimeType", path)
        return None

    mime_types = tuple(item.strip() for item in mime_line.split(";") if item.strip())
    return DesktopEntry(
        path=path, exec_command=strip_field_codes(exec_line), mime_types=mime_types
    )


def entry_patterns(entry: DesktopEntry) -> list[str]:
    patterns: list[str] = []
    for mime_type in entry.mime_types:
        for extension in extensions_for(mime_type):
            pattern = f"*.{extension}"
            if pattern not in patterns:
                patterns.append(pattern)
    return patterns


def is_desktop_file(path: Path) -> bool:
    return path.suffix == DESKTOP_SUFFIX


def iter_desktop_entries(target: Path) -> Iterator[DesktopEntry]:
    """Yield entries for a file, or for every ``.desktop`` file under a directory."""
    if target.is_dir():
        files: Iterator[Path] = iter_tree(target, is_desktop_file)
    else:
        # Raises on a missing target, like any unreadable config input.
        target.stat()
        files = iter([target]) if is_desktop_file(target) else iter([])

    for path in files:
        entry = read_desktop_entry(path)
        if entry is not None:
            yield entry
