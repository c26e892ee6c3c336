"""semi-cli -- scaffolding for Semi full-stack projects."""

__version__ = "0.1.0"
