"""IP Reflector - shows clients the address they connect from"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ip-reflector")
except PackageNotFoundError:
    __version__ = "dev"
