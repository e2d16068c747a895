"""Command-line tools for SupplyGuard."""
