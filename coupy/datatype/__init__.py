# -*- coding: utf-8 -*-
#
# Populate namespace with datatype routines and classes
#

# Import __all__ routines from local modules
from . import freq_data
from .freq_data import *

# Populate local __all__ namespace
__all__ = []
__all__.extend(freq_data.__all__)
