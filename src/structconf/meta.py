"""Package metadata for structconf."""

__app_name__ = "structconf"
__version__ = "0.3.0"
__description__ = "Bind dataclass fields to command-line flags, environment variables and defaults."
__license_type__ = "MIT"

__all__ = [
    "__app_name__",
    "__description__",
    "__license_type__",
    "__version__",
]
