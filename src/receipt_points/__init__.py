try:
    from receipt_points._version import __version__
except ImportError:
    try:
        from importlib.metadata import version as _version

        __version__ = _version("receipt-points")
    except Exception:
        __version__ = "unknown"

__all__ = ["__version__"]
