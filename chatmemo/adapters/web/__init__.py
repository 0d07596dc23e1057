"""Web (webhook) adapter."""
