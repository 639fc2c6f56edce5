"""Source hosts and README processing."""
