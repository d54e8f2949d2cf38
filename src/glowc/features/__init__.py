"""Feature slices: cache, templating and build orchestration."""
