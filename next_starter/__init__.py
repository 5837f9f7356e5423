"""next-starter: scaffold a Next.js starter project from a few CLI toggles."""

__version__ = "0.1.0"
