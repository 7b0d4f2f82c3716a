"""Infrastructure layer: JSON codec, HTTP execution and observability."""
