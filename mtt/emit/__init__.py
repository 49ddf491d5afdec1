"""TypeScript interface rendering and output writing."""

from .emitter import InterfaceEmitter, OutputWriteError

__all__ = ["InterfaceEmitter", "OutputWriteError"]
