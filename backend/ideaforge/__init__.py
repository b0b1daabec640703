"""IdeaForge backend API."""
