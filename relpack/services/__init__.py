"""Packaging services: manifest, build matrix, compilation and publishing."""
