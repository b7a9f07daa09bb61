from textchain.api.routers import markov_router

__all__ = ["markov_router"]
