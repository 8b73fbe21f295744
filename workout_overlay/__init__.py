"""
Workout Overlay

Draws workout statistics (TCX/FIT) and a contrast-aware brand watermark
onto a photo.
"""

__version__ = "1.0.0"
