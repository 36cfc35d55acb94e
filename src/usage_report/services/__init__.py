"""Metric derivation, cost estimation, formatting and export."""
