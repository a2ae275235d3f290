"""REST API for DocVault."""
