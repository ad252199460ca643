"""bundlesync — PR transfer-change analysis and module dependency updates."""

__version__ = "0.1.0"
