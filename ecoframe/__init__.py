"""Plain-logic core of a networked 2D sandbox: packet codec, messages, physics, health, creatures, profiling, input and drawing helpers."""

__version__ = "0.1.0"

__all__ = [
    "assets",
    "codec",
    "compress",
    "creatures",
    "drawing",
    "health",
    "input",
    "messages",
    "netstats",
    "physics",
    "profiler",
]