# (c) Nelen & Schuurmans

from .asgi import *  # NOQA
from .error_responses import *  # NOQA
from .fastapi_access_logger import *  # NOQA
from .request_query import *  # NOQA
from .resource import *  # NOQA
from .security import *  # NOQA
from .service import Service  # NOQA
