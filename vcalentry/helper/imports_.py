""" List of all common imports except __future__ and aliases"""

import re
from types import MappingProxyType

__all__ = [re, MappingProxyType]
