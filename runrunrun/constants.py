from typing import Final


DEFAULT_PROFILE: Final[str] = "default"

CONFIG_FILENAME: Final[str] = "rrr.conf"
SYSTEM_CONFIG_DIR: Final[str] = "/etc"
FREEBSD_SYSTEM_CONFIG_DIR: Final[str] = "/usr/local/etc"

ENV_CONFIG: Final[str] = "RRR_CONFIG"
ENV_PROFILE: Final[str] = "RRR_PROFILE"
ENV_FALLBACK: Final[str] = "RRR_FALLBACK"
ENV_CASE_SENSITIVE: Final[str] = "RRR_CASE_SENSITIVE"
ENV_SHELL: Final[str] = "RRR_SHELL"

TARGET_PLACEHOLDER: Final[str] = "%s"
DESKTOP_SUFFIX: Final[str] = ".desktop"
DESKTOP_SECTION: Final[str] = "Desktop Entry"
DESKTOP_MIME_KEYS: Final[tuple[str, ...]] = ("MimeType", "MimeTypes")

DIRECTIVE_PROFILE: Final[str] = "profile"
DIRECTIVE_INCLUDE: Final[str] = "include"
DIRECTIVE_IMPORT: Final[str] = "import"
