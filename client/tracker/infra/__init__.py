"""Infrastructure: storage, gateway, scheduling."""
