"""
Layout loader - parses YAML layout files into FieldLayout objects.

    layouts:
      users:
        model: user
        fields: [name, email]
        required_fields: [email]
        extended_fields:
          - [Twitter, social, twitter]
"""
from pathlib import Path
from typing import Dict, Optional

import yaml

from recordcsv.fields.layout import FieldLayout


class LayoutLoader:
    """
    Loader for CSV layout configuration.

    Loads a YAML file and caches the parsed layouts in memory.
    """

    def __init__(self, layout_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            layout_path: Path to layout YAML file (default: "layouts.yaml")
        """
        self.layout_path = layout_path or Path("layouts.yaml")
        self._cache: Optional[Dict[str, FieldLayout]] = None

    def load(self, force_reload: bool = False) -> Dict[str, FieldLayout]:
        """
        Load and validate all layouts.

        Args:
            force_reload: If True, bypass cache and reload from disk

        Returns:
            Validated layouts by name
        """
        if self._cache is not None and not force_reload:
            return self._cache

        with open(self.layout_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        layouts = {
            name: FieldLayout.from_dict(layout_data or {})
            for name, layout_data in (data.get("layouts") or {}).items()
        }
        for name, layout in layouts.items():
            try:
                layout.validate()
            except ValueError as e:
                raise type(e)(f"Layout '{name}': {e}") from e

        self._cache = layouts
        return layouts

    def get_layout(self, name: str) -> FieldLayout:
        """Get a layout by name."""
        layouts = self.load()
        if name not in layouts:
            raise ValueError(f"Layout '{name}' not found in {self.layout_path}")
        return layouts[name]
