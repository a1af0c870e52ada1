# -*- coding: utf-8 -*-
#
# Constant definitions used throughout coupy
#

# Builtin/3rd party package imports
import numpy as np

# Local imports
from coupy.shared.errors import UnsupportedModeError


# Module-wide output specs
spectralDTypes = {"pow": np.float64,
                  "abs": np.float64,
                  "real": np.float64,
                  "imag": np.float64,
                  "angle": np.float64,
                  "absreal": np.float64,
                  "absimag": np.float64,
                  "fourier": np.complex128,
                  "complex": np.complex128
                  }

#: output conversion of complex connectivity values
spectralConversions = {
    'pow': lambda x: (x * np.conj(x)).real.astype(spectralDTypes['pow']),
    'abs': lambda x: (np.absolute(x)).real.astype(spectralDTypes['abs']),
    'fourier': lambda x: np.asarray(x).astype(spectralDTypes['fourier']),
    'real': lambda x: np.real(x).astype(spectralDTypes['real']),
    'imag': lambda x: np.imag(x).astype(spectralDTypes['imag']),
    'angle': lambda x: np.angle(x).astype(spectralDTypes['angle']),
    'absreal': lambda x: np.abs(np.real(x)).astype(spectralDTypes['absreal']),
    'absimag': lambda x: np.abs(np.imag(x)).astype(spectralDTypes['absimag'])
}

# FT compat
spectralConversions["complex"] = spectralConversions["fourier"]

#: all supported values of the `output` parameter
availableOutputs = tuple(spectralConversions.keys())


def complex_eval(x, output='abs'):
    """
    Project complex valued connectivity estimates, e.g. coherencies,
    onto the requested (real) representation.

    Parameters
    ----------
    x : :class:`numpy.ndarray`
        Complex (or real) input of arbitrary shape
    output : str
        One of :data:`availableOutputs`, ``'complex'`` and ``'fourier'``
        leave the values untouched

    Returns
    -------
    out : :class:`numpy.ndarray`
        Same shape as `x`
    """

    try:
        conversion = spectralConversions[output]
    except (KeyError, TypeError):
        raise UnsupportedModeError(output, availableOutputs)

    return conversion(x)
