# -*- coding: utf-8 -*-
#
# Import utility functions mainly used internally
#

# Import __all__ routines from local modules
from . import (errors, parsers, tools, kwarg_decorators)
from .errors import *
from .parsers import *
from .tools import *
from .kwarg_decorators import *

# Populate local __all__ namespace
__all__ = []
__all__.extend(errors.__all__)
__all__.extend(parsers.__all__)
__all__.extend(tools.__all__)
__all__.extend(kwarg_decorators.__all__)
