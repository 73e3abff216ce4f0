"""Interface web (API REST FastAPI) de Homeflix."""
