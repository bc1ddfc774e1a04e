"""FridgeAI API - FastAPI application exposing the recommendation session."""
