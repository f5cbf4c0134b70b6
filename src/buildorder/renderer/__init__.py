"""Renderers for resolved build orders."""
