"""Translation wrapper: rewrites component source so user-facing text goes through ``t()``."""
