"""Presentation-facing schemas."""
