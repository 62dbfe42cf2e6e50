"""Bundled data files for wpslim."""
