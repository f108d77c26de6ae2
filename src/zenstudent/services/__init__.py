"""Application services: safety, conversation, mood and exercises."""
