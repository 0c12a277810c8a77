"""Tempo analysis pipeline: filter bank, peak picking, histogram voting."""
