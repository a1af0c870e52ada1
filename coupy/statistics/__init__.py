# -*- coding: utf-8 -*-
#
# Populate namespace with statistics routines
#

from . import jackknifing, replicates
from .jackknifing import trial_avg_replicates, bias_factor, bias_var, standard_error
from .replicates import ensure_rpt_axis, accumulate, average_replicates, normalize_replicates

# Populate local __all__ namespace
# with the user-exposed statistics routines
__all__ = ['trial_avg_replicates', 'bias_var', 'accumulate']
