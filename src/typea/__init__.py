"""declarative schemas that hydrate, validate and serialize json compatible data"""
__version__ = "0.1.0"
import logging

from . import exceptions, utils
from .constraints import *
from .exceptions import *
from .fields import *
from .result import *
from .schema import *
from . import jsonschemas, nested, serialize  # isort:skip

logging.getLogger(__name__).addHandler(logging.NullHandler())
