"""Infrastructure: storage adapters and the filesystem registry."""
