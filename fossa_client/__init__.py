# -*- coding: utf-8 -*-
# (c) Nelen & Schuurmans

from .base.domain.exceptions import *  # NOQA
from .base.domain.locator import *  # NOQA
from .base.domain.pagination import *  # NOQA
from .base.domain.provider import *  # NOQA
from .base.domain.types import *  # NOQA
from .base.domain.value_object import *  # NOQA
from .models import *  # NOQA
from .client import *  # NOQA

# fmt: off
__version__ = '0.1.0.dev0'
# fmt: on
