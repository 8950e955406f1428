# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""The scopedxml package."""

from importlib import metadata

try:
    __version__ = metadata.version("scopedxml")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+unknown"
del metadata

from .config import *
from .nodes import *
from .serializer import *
