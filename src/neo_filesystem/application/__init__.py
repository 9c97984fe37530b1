"""Application layer: normalization, naming, hooks and the storage coordinator."""
