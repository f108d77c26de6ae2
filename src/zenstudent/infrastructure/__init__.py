"""Infrastructure adapters: storage, LLM providers, notifications, monitoring."""
