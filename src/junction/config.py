"""Server settings.

Settings is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. Settings can be
persisted to and loaded from a JSON file.
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from junction.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Settings:
    """Server settings. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        settings = Settings(domain="example.org", use_https=True,
                            cert_file="cert.pem", key_file="key.pem")
    """

    # Listening
    domain: str = "localhost"
    bind: str = "0.0.0.0"
    http_port: int = 80
    https_port: int = 443
    workers: int = 1

    # TLS
    use_https: bool = False
    use_http_redirect: bool = False
    cert_file: str | None = None
    key_file: str | None = None

    # Static files (disabled while root is None)
    root: str | None = None
    fallback_redirect: str = "/404"
    file_extension_filter: tuple[str, ...] = ()

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.use_https and not (self.cert_file and self.key_file):
            msg = "use_https requires both cert_file and key_file."
            raise ConfigurationError(msg)

    # -- Derived addresses --

    @property
    def scheme(self) -> str:
        return "https://" if self.use_https else "http://"

    @property
    def port(self) -> int:
        """The port the app itself listens on."""
        return self.https_port if self.use_https else self.http_port

    @property
    def addr(self) -> str:
        return f"{self.domain}:{self.port}"

    @property
    def bind_addr(self) -> str:
        return f"{self.bind}:{self.port}"

    @property
    def url(self) -> str:
        return self.scheme + self.addr

    @property
    def url_https(self) -> str:
        return f"https://{self.domain}:{self.https_port}"

    @property
    def url_http(self) -> str:
        return f"http://{self.domain}:{self.http_port}"

    # -- Copies --

    def with_root(self, root: str | Path | None) -> Settings:
        """Return a copy serving static files from *root*."""
        return replace(self, root=None if root is None else str(root))

    def with_file_extension_filter(self, *extensions: str) -> Settings:
        """Return a copy that also refuses files with *extensions*.

        Extensions are given without the dot. Duplicates are dropped,
        first occurrence wins.
        """
        merged = dict.fromkeys((*self.file_extension_filter, *(e.lstrip(".") for e in extensions)))
        return replace(self, file_extension_filter=tuple(merged))

    # -- Persistence --

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["file_extension_filter"] = list(self.file_extension_filter)
        return data

    def save_json(self, path: str | Path) -> None:
        """Write the settings to *path* as tab-indented JSON."""
        Path(path).write_text(json.dumps(self.to_dict(), indent="\t") + "\n", encoding="utf-8")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from a mapping; keys not listed are left at their defaults.

        Raises:
            ConfigurationError: On unknown keys.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown settings: {', '.join(unknown)}"
            raise ConfigurationError(msg)
        values = dict(data)
        if "file_extension_filter" in values:
            values["file_extension_filter"] = tuple(values["file_extension_filter"])
        return cls(**values)

    @classmethod
    def load_json(cls, path: str | Path) -> Settings:
        """Load settings saved by ``save_json``.

        Raises:
            OSError: If the file cannot be read.
            ConfigurationError: If the file is not a JSON object of known settings.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            msg = f"Settings file {str(path)!r} is not valid JSON: {exc}"
            raise ConfigurationError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Settings file {str(path)!r} must contain a JSON object."
            raise ConfigurationError(msg)
        return cls.from_dict(data)
