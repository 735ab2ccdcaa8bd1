"""Domain packages for the client data layer."""
