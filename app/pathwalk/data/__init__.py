"""Bundled data files for pathwalk."""
