"""Dye garden configurator — plan a garden grid of dye plants and share it as a link."""

__version__ = "0.1.0"
