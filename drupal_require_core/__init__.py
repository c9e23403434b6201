"""Drupal core updater - bump drupal/core-* Composer requirements in one go."""

__version__ = "1.0.0"
