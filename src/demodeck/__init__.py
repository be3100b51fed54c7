"""demodeck: menu-driven window orchestration for immediate-mode GUI hosts."""

__version__ = "0.1.0"

__all__ = ["__version__"]
