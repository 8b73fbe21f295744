#!/usr/bin/env python3
"""
Resource Location Module

Knows where fonts and watermark images live. Every lookup walks an
ordered list of candidate directories and returns the first existing
file, so the tool works from the repository root, from an installed
package, or with directories given on the command line.

Usage:
    from workout_overlay.config.resource_config import ResourceLocator

    locator = ResourceLocator(assets_dir=Path("img"))
    path = locator.find_asset("garmin_white.png")
"""

import logging
from pathlib import Path
from typing import List, Optional

from workout_overlay.config.overlay_config import FontConfig


class ResourceLocator:
    """Resolves font and watermark files through ordered search paths"""

    ASSETS_DIR_NAME = "img"
    FONTS_DIR_NAME = "fonts"

    def __init__(
        self,
        assets_dir: Optional[Path] = None,
        fonts_dir: Optional[Path] = None,
        working_dir: Optional[Path] = None
    ):
        """
        Initialize resource locator.

        Args:
            assets_dir: Directory with watermark images (searched first)
            fonts_dir: Directory with font files (searched first)
            working_dir: Base for relative defaults. Defaults to the current directory.
        """
        self.logger = logging.getLogger(__name__)
        self.assets_dir = Path(assets_dir) if assets_dir else None
        self.fonts_dir = Path(fonts_dir) if fonts_dir else None
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        # workout_overlay/config -> workout_overlay -> project root
        self.project_root = Path(__file__).resolve().parent.parent.parent

    def asset_search_dirs(self) -> List[Path]:
        """Directories searched for watermark images, in priority order"""
        dirs = []
        if self.assets_dir is not None:
            dirs.append(self.assets_dir)
        dirs.append(self.working_dir)
        dirs.append(self.working_dir / self.ASSETS_DIR_NAME)
        dirs.append(self.project_root / self.ASSETS_DIR_NAME)
        return dirs

    def font_search_dirs(self) -> List[Path]:
        """Directories searched for font files, in priority order"""
        dirs = []
        if self.fonts_dir is not None:
            dirs.append(self.fonts_dir)
        dirs.append(self.working_dir / self.FONTS_DIR_NAME)
        dirs.append(self.project_root / self.FONTS_DIR_NAME)
        dirs.extend(Path(d) for d in FontConfig.SYSTEM_FONT_DIRS)
        return dirs

    def find_asset(self, filename: str) -> Optional[Path]:
        """
        Find a watermark image.

        Args:
            filename: Image file name (e.g. "garmin_white.png")

        Returns:
            Path to the first match, or None if not found anywhere
        """
        return self._find(filename, self.asset_search_dirs())

    def find_font(self, filename: str) -> Optional[Path]:
        """
        Find a font file.

        Args:
            filename: Font file name (e.g. "DejaVuSans.ttf")

        Returns:
            Path to the first match, or None if not found anywhere
        """
        return self._find(filename, self.font_search_dirs())

    def _find(self, filename: str, search_dirs: List[Path]) -> Optional[Path]:
        for directory in search_dirs:
            candidate = directory / filename
            if candidate.is_file():
                self.logger.debug(f"Found {filename} at: {candidate}")
                return candidate

        self.logger.debug(
            f"{filename} not found in: {', '.join(str(d) for d in search_dirs)}"
        )
        return None
