"""Infrastructure layer - persistence, configuration and observability."""
