"""Models for setup-docker-action."""
