# apps/api/review/__init__.py

# ONLY import models here (needed for registry)
from .models import Review

__all__ = ["Review"]
