"""Front-end asset lookup.

Compiled scripts are listed in a mix-manifest file mapping logical asset
paths to versioned ones, e.g.

    {"/geocomplete/geocomplete.js": "/geocomplete/geocomplete.js?id=abc123"}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Dict

from .config import AssetConfig, get_config
from .domain.errors import ConfigurationError

JS_ASSET = "/geocomplete/geocomplete.js"
CSS_ASSET = "/geocomplete/geocomplete.css"


@dataclass
class AssetManifest:
    """Resolves asset URLs through the manifest file.

    Attributes:
        config: Asset location settings
    """

    config: AssetConfig = field(default_factory=lambda: get_config().assets)

    @cached_property
    def entries(self) -> Dict[str, str]:
        """Manifest contents, loaded on first use."""
        path = self.config.manifest_path
        try:
            with path.open(encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Cannot read asset manifest {path}",
                setting_name="manifest_path",
                cause=e,
            ) from e

        logging.getLogger(__name__).debug(
            "Asset manifest loaded", extra={"path": str(path), "entries": len(entries)}
        )
        return entries

    def url(self, asset: str) -> str:
        """Return the public URL of a logical asset path."""
        try:
            versioned = self.entries[asset]
        except KeyError as e:
            raise ConfigurationError(
                f"Asset {asset} is not in the manifest",
                setting_name="manifest_path",
                cause=e,
            ) from e
        return self.config.base_url.rstrip("/") + "/" + versioned.lstrip("/")

    def js_url(self) -> str:
        return self.url(JS_ASSET)

    def css_url(self) -> str:
        return self.url(CSS_ASSET)

    def path(self, asset: str) -> Path:
        """Return the file backing a logical asset path, for publishing.

        Compiled files sit next to the manifest, under the same relative
        path as their manifest key.
        """
        self.url(asset)
        return self.config.manifest_path.parent / asset.lstrip("/")
