"""Infrastructure helpers shared by adapters."""
