"""Tests for ResolverConfig."""

import logging
import os

import pytest

from fontmatch import ResolverConfig


class TestResolverConfigDefaults:
    """Tests for ResolverConfig default configuration."""

    def test_defaults(self) -> None:
        config = ResolverConfig()
        assert config.use_cache is True
        assert config.default_size == 14
        assert config.fallback_family == "Helvetica"
        assert config.font_dirs == []
        assert config.backend is None

    def test_default_without_environment(self) -> None:
        """Test that default() matches the constructor defaults."""
        assert ResolverConfig.default() == ResolverConfig()

    def test_invalid_default_size(self) -> None:
        with pytest.raises(ValueError, match="default_size"):
            ResolverConfig(default_size=0)

    def test_invalid_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown backend"):
            ResolverConfig(backend="coretext")


class TestResolverConfigEnvironment:
    """Tests for ResolverConfig.default() reading environment variables."""

    def test_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FONTMATCH_USE_CACHE", "false")
        monkeypatch.setenv("FONTMATCH_DEFAULT_SIZE", "12.5")
        monkeypatch.setenv("FONTMATCH_FALLBACK_FAMILY", "Arial")
        monkeypatch.setenv(
            "FONTMATCH_FONT_DIRS", os.pathsep.join(["/opt/fonts", "", "/srv/fonts"])
        )
        monkeypatch.setenv("FONTMATCH_BACKEND", "Files")

        config = ResolverConfig.default()

        assert config.use_cache is False
        assert config.default_size == 12.5
        assert config.fallback_family == "Arial"
        assert config.font_dirs == ["/opt/fonts", "/srv/fonts"]
        assert config.backend == "files"

    @pytest.mark.parametrize(
        "value, expected",
        [("1", True), ("yes", True), ("ON", True), ("0", False), ("no", False)],
    )
    def test_boolean_values(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        monkeypatch.setenv("FONTMATCH_USE_CACHE", value)
        assert ResolverConfig.default().use_cache is expected

    def test_invalid_boolean(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FONTMATCH_USE_CACHE", "maybe")
        with pytest.raises(ValueError, match="FONTMATCH_USE_CACHE"):
            ResolverConfig.default()

    def test_invalid_number(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FONTMATCH_DEFAULT_SIZE", "large")
        with pytest.raises(ValueError, match="FONTMATCH_DEFAULT_SIZE"):
            ResolverConfig.default()

    def test_non_positive_size_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that a non-positive size falls back to the default."""
        monkeypatch.setenv("FONTMATCH_DEFAULT_SIZE", "-3")
        with caplog.at_level(logging.WARNING):
            config = ResolverConfig.default()

        assert config.default_size == 14
        assert "not positive" in caplog.text
