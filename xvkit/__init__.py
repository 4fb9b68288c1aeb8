"""Small Unix-style tools, a regex matcher, an allocator, a shell parser and layout helpers."""

__version__ = "0.1.0"
__all__ = [
    "layout",
    "virtio",
    "fmt",
    "matching",
    "umalloc",
    "parkmiller",
    "coreutils",
    "fsutils",
    "primes",
    "xargs",
    "shellparse",
    "lineedit",
]