"""Normalization, validation and transport internals."""
