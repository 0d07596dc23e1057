"""Adapters for chat platforms and storage backends."""
