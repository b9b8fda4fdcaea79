"""Storage layer for setup-docker-action."""
