"""Brandshift backend: brand catalog and AI color scheme generation."""
