"""
This package builds Debian meta-packages that delegate installation to a
foreign package manager (RubyGems or pip) and stage PATH wrappers for the
executables it installs.
"""

from .exceptions import (
    ConfigurationError,
    DebwrapError,
    MissingToolError,
    ToolInvocationError,
    ValidationError,
)
from .models import ECOSYSTEMS, PYPI, RUBYGEMS, Ecosystem, PackageMetadata
from .packaging.stager import PackageStager

__all__ = [
    "ECOSYSTEMS",
    "PYPI",
    "RUBYGEMS",
    "ConfigurationError",
    "DebwrapError",
    "Ecosystem",
    "MissingToolError",
    "PackageMetadata",
    "PackageStager",
    "ToolInvocationError",
    "ValidationError",
]
