"""Test project files, unit trees, CSV exchange and a results database reader."""

__version__ = "0.1.0"