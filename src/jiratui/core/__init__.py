"""Event-driven core: the state actor, its event bus and the fetch gateway."""
