from importlib.metadata import version, PackageNotFoundError
__all__ = ["questions", "wizard", "scoring", "errors", "utils"]
try:
    __version__ = version("ecotrace")
except PackageNotFoundError:
    __version__ = "0.1.0"
