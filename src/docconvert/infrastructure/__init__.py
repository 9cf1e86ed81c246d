"""Infrastructure adapters: readers, serializers, PDF renderer, config."""
