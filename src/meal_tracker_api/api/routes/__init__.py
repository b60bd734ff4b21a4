"""API routes."""

from . import dashboard, estimates, meals, profile, recipes, suggestions

__all__ = ["dashboard", "estimates", "meals", "profile", "recipes", "suggestions"]
