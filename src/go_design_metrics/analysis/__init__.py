"""Presentation of module metrics: reports and progress display."""
