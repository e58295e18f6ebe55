"""Intermediate node model and export document schema."""
