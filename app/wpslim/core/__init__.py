"""Core infrastructure: configuration, paths, theming and errors."""
