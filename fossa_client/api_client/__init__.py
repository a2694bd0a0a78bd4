from .api_gateway import *  # NOQA
from .api_provider import *  # NOQA
from .exceptions import *  # NOQA
