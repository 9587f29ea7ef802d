import os
import shlex
from pathlib import Path
from typing import Callable, Iterator


def quote(text: str) -> str:
    return shlex.quote(text)


def unquote(text: str) -> str:
    """Remove shell quotes around a single field, e.g. '"a b"' -> 'a b'."""
    parts = shlex.split(text)
    if len(parts) != 1:
        raise ValueError(f"invalid quoted string: {text}")
    return parts[0]


def split_command(command: str) -> list[str]:
    return shlex.split(command)


def strip_comment(line: str) -> str:
    """Cut a ``#`` comment that starts a word outside of quotes."""
    quote_char: str | None = None
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
            continue
        if char == "\\" and quote_char != "'":
            escaped = True
            continue
        if quote_char is not None:
            if char == quote_char:
                quote_char = None
            continue
        if char in ("'", '"'):
            quote_char = char
        elif char == "#" and (index == 0 or line[index - 1].isspace()):
            return line[:index]
    return line


def expand_path(text: str, base_dir: Path | None = None) -> Path:
    path = Path(os.path.expanduser(os.path.expandvars(text)))
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


def canonical_path(path: Path) -> Path:
    return path.resolve(strict=True)


def iter_tree(
    root: Path, accept: Callable[[Path], bool], _seen: set[Path] | None = None
) -> Iterator[Path]:
    """Yield accepted regular files under ``root``, lexicographically, depth first."""
    seen = _seen if _seen is not None else set()
    real = root.resolve()
    if real in seen:
        return
    seen.add(real)
    for child in sorted(root.iterdir(), key=lambda item: item.name):
        if child.is_dir():
            yield from iter_tree(child, accept, seen)
        elif child.is_file() and accept(child):
            yield child


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
