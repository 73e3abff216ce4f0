"""Routes de l'API REST."""
