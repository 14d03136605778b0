"""Custom exceptions for chat-tools."""


class ChatToolsError(Exception):
    """Base exception for all chat-tools errors."""

    pass


class InvalidConfigError(ChatToolsError):
    """Raised when a filter configuration value is outside its domain."""

    pass


class ParseError(ChatToolsError):
    """Raised when a YAML configuration file cannot be read."""

    pass
