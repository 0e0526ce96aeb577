"""Build a cached index of an image classification dataset laid out as split/class/image."""

__version__ = "0.1.0"
