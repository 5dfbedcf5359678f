"""AI Dotfiles Manager: scaffold rules and configs for AI coding assistants."""

__version__ = "1.0.0"
