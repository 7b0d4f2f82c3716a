"""Feature modules built on the infrastructure layer."""
