"""Services for setup-docker-action."""
