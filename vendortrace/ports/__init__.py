"""Port interfaces (protocols) implemented by adapters."""
