"""Dataset generation: seeds, ordering, id pools, patterns and providers."""
