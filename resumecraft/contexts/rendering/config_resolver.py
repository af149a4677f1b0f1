"""
Layout Preset Resolution

Applies named typography presets to the default ruleset. Presets are composable
and can override each other, allowing flexible combination of spacing and fonts.

Examples:
    # Apply multiple presets (later overrides earlier)
    >>> apply_presets(Typography(), ["spacing_compact", "fonts_times"])

    # Mix base preset with override
    >>> apply_presets(Typography(), ["fonts_large", "spacing_compact"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from omegaconf import OmegaConf

from resumecraft.contexts.rendering.defaults import Typography

load_dotenv()
LAYOUT_PRESETS_PATH = Path(os.getenv("LAYOUT_PRESETS_PATH", "configs/layout_presets.yaml"))


def load_layout_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load layout_presets.yaml and flatten to a single-level dict.

    Collapses nested structure: spacing.compact -> spacing_compact

    Args:
        config_path: Optional path to config file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to typography overrides
        Example: {"spacing_compact": {...}, "fonts_times": {...}}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def apply_presets(
    typography: Typography,
    preset_names: List[str],
    config_path: Path = None,
) -> Typography:
    """
    Apply named presets to a typography ruleset.

    Presets are applied in order, with later presets overriding earlier ones.
    The input ruleset is not modified.

    Args:
        typography: Base ruleset
        preset_names: Preset names to apply (e.g., ["spacing_compact", "fonts_times"])
        config_path: Optional path to layout_presets.yaml (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        New Typography with presets applied

    Raises:
        ValueError: If a preset is not found or names an unknown role
    """
    if not preset_names:
        return typography

    presets_dict = load_layout_presets(config_path)

    merged = OmegaConf.create(typography.to_dict())
    for preset_name in preset_names:
        if preset_name not in presets_dict:
            available = list(presets_dict.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")

        merged = OmegaConf.merge(merged, presets_dict[preset_name])

    return Typography.from_dict(OmegaConf.to_container(merged, resolve=True))
