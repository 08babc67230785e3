"""Bundled data files for trashctl."""
