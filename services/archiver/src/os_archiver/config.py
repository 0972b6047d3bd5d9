"""Run settings for the archiver."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_TIMESTAMP_FIELD = "timestamp"


@dataclass(frozen=True)
class ArchiveSettings:
    """Parameters of a single archival run."""

    pattern: str
    url: str
    bypass: int
    repo: str
    analyze: bool = False
    timestamp_field: str = DEFAULT_TIMESTAMP_FIELD

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ArchiveSettings":
        settings = cls(
            pattern=(args.pattern or "").strip(),
            url=(args.url or "").strip(),
            bypass=args.bypass,
            repo=(args.repo or "").strip(),
            analyze=bool(args.analyze),
            timestamp_field=(args.timestamp_field or "").strip(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise :class:`ConfigError` if a required value is missing."""
        missing = [
            flag
            for flag, value in (
                ("--pattern", self.pattern),
                ("--url", self.url),
                ("--repo", self.repo),
            )
            if not value
        ]
        if self.bypass is None:
            missing.append("--bypass")
        if missing:
            raise ConfigError(f"missing required arguments: {', '.join(missing)}")
        if self.bypass < 0:
            raise ConfigError(f"--bypass must be >= 0, got {self.bypass!r}")
        if self.analyze and not self.timestamp_field:
            raise ConfigError("--timestamp-field must not be empty")
