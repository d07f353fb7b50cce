from importlib import metadata

from visa_intake import __version__ as _local_version

try:
    __version__ = metadata.version("visa-intake")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = _local_version
