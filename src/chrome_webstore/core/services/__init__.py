"""Request building, response mapping and the client pipeline."""
