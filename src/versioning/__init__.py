"""Version specs, comparison, caching and resolution."""
