"""Verse Cadence: review plans for memorized verses."""
