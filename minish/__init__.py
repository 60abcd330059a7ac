"""Core of a small shell: tokenizer, environment, builtins and executor."""

__version__ = "0.1.0"
__all__ = ["builtins", "environment", "executor", "model", "tokenizer"]