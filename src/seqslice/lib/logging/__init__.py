from seqslice.lib.logging.logged_route import LoggedRoute

__all__ = [
    "LoggedRoute",
]
