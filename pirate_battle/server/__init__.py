"""HTTP host for Pirate Battle games."""
