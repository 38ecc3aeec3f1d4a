"""Movie and TV title lookup: resolver, providers and HTTP surface."""
