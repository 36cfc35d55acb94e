"""Loading of the stats cache and per-project session indexes."""
