"""Application layer: use-case services coordinating domain objects and collaborators."""
