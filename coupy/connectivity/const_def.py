# -*- coding: utf-8 -*-
#
# Constant definitions specific for connectivity
#

from enum import Enum


class ConnMethod(str, Enum):
    """The connectivity metrics with an engine"""

    COH = "coh"
    PLV = "plv"
    PSI = "psi"
    DTF = "dtf"
    PDC = "pdc"
    GRANGER = "granger"


#: available methods of :func:`~coupy.connectivityanalysis`
availableMethods = tuple(meth.value for meth in ConnMethod)

#: known metrics without an implementation (yet)
placeholderMethods = ("pli", "di", "pcd", "corr", "xcorr", "spearman")

#: input field of :class:`~coupy.FreqData` needed by each method
inputFields = {ConnMethod.COH: "crsspctrm",
               ConnMethod.PLV: "crsspctrm",
               ConnMethod.PSI: "crsspctrm",
               ConnMethod.DTF: "transfer",
               ConnMethod.PDC: "transfer",
               ConnMethod.GRANGER: "transfer"}

#: name of the result field in the output structure
outputFields = {meth: meth.value + "spctrm" for meth in ConnMethod}

#: methods normalizing cross spectra by the auto spectra
crossSpectralMethods = (ConnMethod.COH, ConnMethod.PLV, ConnMethod.PSI)
