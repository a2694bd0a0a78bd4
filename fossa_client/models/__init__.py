# (c) Nelen & Schuurmans

from .dependency import *  # NOQA
from .issue import *  # NOQA
from .project import *  # NOQA
from .revision import *  # NOQA
