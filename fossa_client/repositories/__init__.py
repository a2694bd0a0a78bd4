from .api_repository import *  # NOQA
from .dependencies import *  # NOQA
from .issues import *  # NOQA
from .projects import *  # NOQA
from .revisions import *  # NOQA
