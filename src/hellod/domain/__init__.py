"""Domain types for hellod."""
