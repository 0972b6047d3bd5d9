from __future__ import annotations

import argparse

import pytest

from os_archiver.config import ArchiveSettings
from os_archiver.errors import ConfigError


def _ns(**overrides) -> argparse.Namespace:
    values = dict(
        pattern=" graylog_* ",
        url="http://opensearch:9200",
        bypass=2,
        repo="s3_repo",
        analyze=False,
        timestamp_field="timestamp",
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def test_from_args_strips_values() -> None:
    settings = ArchiveSettings.from_args(_ns())
    assert settings.pattern == "graylog_*"
    assert settings.bypass == 2
    assert settings.analyze is False


def test_bypass_zero_is_valid() -> None:
    assert ArchiveSettings.from_args(_ns(bypass=0)).bypass == 0


@pytest.mark.parametrize("name", ["pattern", "url", "repo"])
def test_blank_required_value(name: str) -> None:
    with pytest.raises(ConfigError) as info:
        ArchiveSettings.from_args(_ns(**{name: "  "}))
    assert f"--{name}" in str(info.value)


def test_empty_timestamp_field_with_analysis() -> None:
    with pytest.raises(ConfigError):
        ArchiveSettings.from_args(_ns(analyze=True, timestamp_field=""))


def test_empty_timestamp_field_ignored_without_analysis() -> None:
    assert ArchiveSettings.from_args(_ns(timestamp_field="")).timestamp_field == ""
