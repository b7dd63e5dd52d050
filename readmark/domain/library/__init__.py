"""Library module domain layer: the document's chapter tree and search results."""
