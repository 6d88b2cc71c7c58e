"""Business logic: auth sessions, refresh-token registry, owner-scoped resources."""
