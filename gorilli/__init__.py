"""Agent actions for deploying, trading through and querying ERC-4626 vaults."""

__version__ = "0.1.0"
