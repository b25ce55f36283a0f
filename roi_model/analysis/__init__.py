"""Breakeven thresholds and decision-support views on an evaluated business case."""
