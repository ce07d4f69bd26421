"""
Tests for iterator configuration, presets and settings.
"""

from pathlib import Path

import pytest

from solver_control.iteration.config import (
    DEFAULT_MAX_ITERATIONS,
    IteratorConfig,
    IteratorSettings,
    default_config,
    load_config,
)
from solver_control.iteration.presets import (
    PARAMS_DIR,
    get_available_presets,
    get_preset,
)

########################################################
# Validation
########################################################


class TestIteratorConfigValidation:
    def test_defaults_are_valid(self) -> None:
        config = default_config()
        assert config.max_iterations == DEFAULT_MAX_ITERATIONS
        assert config.max_seconds is None

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("relative_tolerance", 0.0, "relative_tolerance must be > 0"),
            ("relative_tolerance", -1e-6, "relative_tolerance must be > 0"),
            ("absolute_tolerance", -1.0, "absolute_tolerance must be >= 0"),
            ("max_iterations", 0, "max_iterations must be > 0"),
            (
                "divergence_growth_factor",
                1.0,
                "divergence_growth_factor must be > 1",
            ),
            ("divergence_window", 1, "divergence_window must be >= 2"),
            ("divergence_window", 0, "divergence_window must be >= 2"),
            ("divergence_patience", 0, "divergence_patience must be >= 1"),
            ("stable_iterations", 0, "stable_iterations must be >= 1"),
            ("max_seconds", 0.0, "max_seconds must be > 0"),
        ],
    )
    def test_invalid_values_rejected(
        self, field: str, value: float, message: str
    ) -> None:
        with pytest.raises(ValueError, match=message):
            IteratorConfig(**{field: value})

    def test_nan_tolerance_rejected(self) -> None:
        with pytest.raises(ValueError, match="relative_tolerance"):
            IteratorConfig(relative_tolerance=float("nan"))


########################################################
# YAML loading
########################################################


class TestLoadConfig:
    def test_none_returns_defaults(self) -> None:
        assert load_config(None) == IteratorConfig()

    def test_partial_yaml_merges_with_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "iterator.yaml"
        path.write_text("relative_tolerance: 1.0e-5\nmax_iterations: 25\n")
        config = load_config(path)
        assert config.relative_tolerance == 1e-5
        assert config.max_iterations == 25
        assert config.divergence_window == IteratorConfig().divergence_window

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml_value(self, tmp_path: Path) -> None:
        path = tmp_path / "iterator.yaml"
        path.write_text("divergence_window: 1\n")
        with pytest.raises(ValueError, match="divergence_window"):
            load_config(path)


########################################################
# Presets
########################################################


class TestPresets:
    def test_configuration_presets_load(self) -> None:
        """Make sure that all the preset configuration files load."""
        for config_path in PARAMS_DIR.glob("*.yaml"):
            preset = load_config(config_path)
            assert preset is not None

    def test_available_presets(self) -> None:
        assert get_available_presets() == ["default", "loose", "strict"]

    def test_default_preset_matches_defaults(self) -> None:
        assert get_preset("default") == IteratorConfig()

    def test_strict_is_tighter_than_loose(self) -> None:
        strict = get_preset("strict")
        loose = get_preset("loose")
        assert strict.relative_tolerance < loose.relative_tolerance
        assert strict.stable_iterations > loose.stable_iterations
        assert loose.max_seconds is not None

    def test_get_preset_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("nonexistent_preset")

    def test_get_preset_rejects_paths(self) -> None:
        """Names are matched against the bundled presets, not joined as paths."""
        for name in ("../default", "params/default", "default.yaml", ""):
            with pytest.raises(ValueError, match="Unknown preset"):
                get_preset(name)


########################################################
# Environment settings
########################################################


class TestIteratorSettings:
    def test_defaults(self) -> None:
        assert IteratorSettings().to_config() == IteratorConfig()

    def test_environment_overrides(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SOLVER_CONTROL_MAX_ITERATIONS", "75")
        monkeypatch.setenv("SOLVER_CONTROL_RELATIVE_TOLERANCE", "1e-4")
        monkeypatch.setenv("SOLVER_CONTROL_MAX_SECONDS", "2.5")
        config = IteratorSettings().to_config()
        assert config.max_iterations == 75
        assert config.relative_tolerance == 1e-4
        assert config.max_seconds == 2.5

    def test_invalid_environment_value(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SOLVER_CONTROL_DIVERGENCE_WINDOW", "1")
        with pytest.raises(ValueError, match="divergence_window"):
            IteratorSettings().to_config()
