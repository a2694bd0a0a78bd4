# (c) Nelen & Schuurmans

from .fixtures import *  # NOQA
from .presentation import *  # NOQA
from .server import *  # NOQA
from .state import *  # NOQA
