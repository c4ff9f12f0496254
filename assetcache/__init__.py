"""assetcache: persistent, versioned on-disk cache for binary artifacts."""

__version__ = "1.0.0"
