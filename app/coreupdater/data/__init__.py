"""Bundled data files for coreupdater."""
