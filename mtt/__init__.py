"""Generate TypeScript interfaces from C# model classes."""

__version__ = "0.1.0"
