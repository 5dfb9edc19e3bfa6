"""Hotel room maintenance log API."""
