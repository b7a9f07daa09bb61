"""Memory-lean order-N Markov chain text generator."""

__version__ = "1.0.0"
