"""FridgeAI HTTP service."""
