"""Buffer-name codec for Vim/Neovim plugin hosts."""

__all__ = [
    "bufname",
    "runtime",
]

__version__ = "0.1.0"
