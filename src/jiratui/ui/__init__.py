"""Terminal rendering of application state."""
