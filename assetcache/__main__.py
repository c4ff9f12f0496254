"""Main entry point when executing assetcache as a package.

This allows running the package using python -m assetcache.
"""

from assetcache.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
