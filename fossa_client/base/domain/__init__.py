# (c) Nelen & Schuurmans

from .exceptions import *  # NOQA
from .locator import *  # NOQA
from .pagination import *  # NOQA
from .provider import *  # NOQA
from .types import *  # NOQA
from .value_object import *  # NOQA
