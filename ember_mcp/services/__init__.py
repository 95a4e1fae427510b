"""I/O services: corpus fetching, embeddings, registries and release metadata."""
