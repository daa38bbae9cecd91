"""Model registry for the api app.

Models live in the ``domain_*`` modules; importing them here is what makes
Django register them.
"""
from .domain_core import *  # noqa: F401,F403
from .domain_people import *  # noqa: F401,F403
from .domain_fees import *  # noqa: F401,F403
from .domain_uploads import *  # noqa: F401,F403
from .domain_school import *  # noqa: F401,F403
from .domain_logs import *  # noqa: F401,F403
