"""podcut: edit timeline engine for podcast and video cuts."""

__version__ = "0.1.0"
