"""Utility helpers for ImageDeskew."""
