"""DocVault - per-project document vaults on local disk."""

__version__ = "1.0.0"
