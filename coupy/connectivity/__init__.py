# -*- coding: utf-8 -*-
#
# Populate namespace with user exposed
# connectivity methods
#

from .connectivity_analysis import connectivityanalysis

# Populate local __all__ namespace
# with the user-exposed frontend
__all__ = ['connectivityanalysis']
