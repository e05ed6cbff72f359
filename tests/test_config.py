"""Tests for ResolverConfig validation and defaults.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses

import pytest

from pocatalog.localization import ResolverConfig


class TestResolverConfig:
    """Construction-time validation."""

    def test_defaults(self) -> None:
        config = ResolverConfig()
        assert config.root == "po"
        assert config.suffix == ".po"
        assert config.fallback_locale == "en_US"
        assert config.send_key_if_not_found is False
        assert config.strict is False
        assert config.max_workers == 2

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            ResolverConfig().root = "other"  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(ResolverConfig(), fallback_locale="fr")
        assert config.fallback_locale == "fr"

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"suffix": ""}, "suffix"),
            ({"fallback_locale": ""}, "fallback_locale"),
            ({"max_workers": 0}, "max_workers"),
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, object], message: str) -> None:
        with pytest.raises(ValueError, match=message):
            ResolverConfig(**kwargs)  # type: ignore[arg-type]
