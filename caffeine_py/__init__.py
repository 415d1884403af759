"""caffeine_py - contest automation on top of the caffeine Codeforces CLI."""

__version__ = "1.0.0"
