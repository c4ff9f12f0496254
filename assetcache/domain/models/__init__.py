"""Domain models: value objects and the cache entry entity."""
