"""
Named iterator configurations shipped with the package.

Each preset is a YAML file under params/ merged onto the IteratorConfig
schema: "strict" for tight residuals, "loose" for quick approximate solves
and "default" matching IteratorConfig().
"""

from pathlib import Path

from solver_control.iteration.config import IteratorConfig, load_config

PARAMS_DIR = Path(__file__).parent / "params"


def get_available_presets() -> list[str]:
    """Names of the bundled presets, sorted."""
    return sorted(path.stem for path in PARAMS_DIR.glob("*.yaml"))


def get_preset(name: str) -> IteratorConfig:
    """
    Load a bundled preset by name.

    Only the bare names returned by get_available_presets() are accepted,
    so a name cannot point at a file outside params/.

    Raises:
        ValueError: If name is not a bundled preset.
    """
    presets = get_available_presets()
    if name not in presets:
        raise ValueError(f"Unknown preset: {name!r}. Available presets: {presets}")
    return load_config(PARAMS_DIR / f"{name}.yaml")
