"""Sub-routers por feature (messages / notifications)."""
