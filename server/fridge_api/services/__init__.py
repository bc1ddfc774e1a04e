"""Service singletons shared by route modules."""
