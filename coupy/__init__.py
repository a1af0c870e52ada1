# -*- coding: utf-8 -*-
#
# Main package initializer
#

# Builtin/3rd party package imports
import os
import numpy as np
from hashlib import blake2b
from importlib.metadata import version, PackageNotFoundError

# Get package version from the installed meta-information
try:
    __version__ = version("coupy")
except PackageNotFoundError:
    __version__ = "-999"

# --- Greeting ---

def startup_print_once(message, force=False):
    """Print message once, unless silenced via `COUPYSILENTSTARTUP`
    or a `~/.coupy/silentstartup` file
    """
    silence_file = os.path.join(os.path.expanduser("~"), ".coupy", "silentstartup")
    if force or (os.getenv("COUPYSILENTSTARTUP") is None and not os.path.isfile(silence_file)):
        print(message)


msg = f"""
coupy {__version__}

Connectivity metrics from cross spectra and transfer functions.
"""
startup_print_once(msg)

# Set up sensible printing options for NumPy arrays
np.set_printoptions(suppress=True, precision=4, linewidth=80)

# Set package-wide config directory
if os.environ.get("COUPYDIR"):
    __cpydir__ = os.path.abspath(os.path.expanduser(os.environ["COUPYDIR"]))
    if not os.path.exists(__cpydir__):
        raise ValueError(f"Environment variable COUPYDIR set to non-existent or unreadable directory '{__cpydir__}'. Please unset COUPYDIR or create the directory.")
else:
    __cpydir__ = os.path.abspath(os.path.join(os.path.expanduser("~"), ".coupy"))

# Establish ID for current session
__sessionid__ = blake2b(digest_size=2, salt=os.urandom(blake2b.SALT_SIZE)).hexdigest()

from .shared.log import setup_logging
__logdir__ = None
setup_logging(cpydir=__cpydir__, session=__sessionid__)

# Fill namespace
from . import (
    shared,
    datatype,
    statistics,
    connectivity)

from .shared import *
from .datatype import *
from .statistics import *
from .connectivity import *

from .shared.log import get_logger, set_loglevel

# Manage user-exposed namespace imports
__all__ = []
__all__.extend(datatype.__all__)
__all__.extend(shared.__all__)
__all__.extend(statistics.__all__)
__all__.extend(connectivity.__all__)
