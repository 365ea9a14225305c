"""Local code assistant: secret and code-smell scanning with a complexity estimate."""

__version__ = "1.0.0"
