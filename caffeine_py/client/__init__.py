"""Client module for caffeine interaction."""

from .client import CaffeineClient
from .models import Contest, ProblemTestcases, Submission

__all__ = ["CaffeineClient", "Contest", "ProblemTestcases", "Submission"]
