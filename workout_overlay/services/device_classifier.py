#!/usr/bin/env python3
"""
Device Classifier

Detects whether a device name belongs to the configured brand and
normalizes free-text device names into a "Brand Model" display form.

Usage:
    from workout_overlay.services.device_classifier import DeviceClassifier

    classifier = DeviceClassifier()
    classifier.is_brand_device("Forerunner 255")       # True
    classifier.normalize_device_name("forerunner 255")  # "Garmin Forerunner 255"
"""

from workout_overlay.config.overlay_config import BrandConfig, GARMIN


def _capitalize_word(word: str) -> str:
    # Titlecase can expand one character ("ß" -> "Ss", "ŉ" -> "ʼN");
    # only the first resulting character stays cased so a second pass is stable.
    titled = word[:1].title() + word[1:]
    return titled[:1] + titled[1:].lower()


def capitalize_words(name: str) -> str:
    """
    Capitalize each whitespace-separated word

    The first character of each word is title-cased and the rest
    lower-cased; runs of whitespace collapse to a single space.
    Applying it twice gives the same result as applying it once.

    Args:
        name: Free-text name

    Returns:
        Capitalized name

    Example:
        >>> capitalize_words("  fenix   7X pro ")
        'Fenix 7x Pro'
        >>> capitalize_words("ßport")
        'Ssport'
    """
    return " ".join(_capitalize_word(word) for word in name.split())


class DeviceClassifier:
    """Brand detection and device name normalization"""

    def __init__(self, brand: BrandConfig = GARMIN):
        """
        Args:
            brand: Brand table to classify against
        """
        self.brand = brand

    def is_brand_device(self, name: str) -> bool:
        """
        Check whether a device name contains any of the brand series tokens

        Args:
            name: Device name in any letter case

        Returns:
            True if any series token is a substring of the lower-cased name
        """
        name_lower = name.lower()
        return any(token in name_lower for token in self.brand.series_tokens)

    def normalize_device_name(self, name: str) -> str:
        """
        Normalize a device name to "Brand Model" form

        Rules, in order:
        1. Name already contains the brand token: capitalize only.
        2. Name contains a known model token (first in table order wins):
           prefix the brand name.
        3. Name equals or starts with the brand token: generic "<Brand> Device".
        4. Otherwise: capitalize only.

        Args:
            name: Free-text device name

        Returns:
            Display name
        """
        name_lower = name.lower()
        brand = self.brand

        if brand.brand_token in name_lower:
            return capitalize_words(name)

        for model in brand.model_tokens:
            if model in name_lower:
                return f"{brand.brand_name} {capitalize_words(name)}"

        if name_lower == brand.brand_token or name_lower.startswith(brand.brand_token):
            return f"{brand.brand_name} Device"

        return capitalize_words(name)
