"""readmegen: generate README.md files for GitHub repositories with Gemini."""

__version__ = "0.1.0"
