"""Azure SQL Database backup storage pricing."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("az-backup-pricing")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
