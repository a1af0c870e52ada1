# -*- coding: utf-8 -*-
#
# Collection of error classes and message helpers for coupy
#

# Builtin/3rd party package imports
import sys
import numpy as np

# Local imports
from coupy.shared.log import get_logger

__all__ = []


class CPYError(Exception):
    """
    Base class for coupy errors
    """
    pass


class CPYTypeError(CPYError):
    """
    coupy-specific version of a TypeError

    Attributes
    ----------
    var : object
        The culprit responsible for ending up here
    varname : str
        Name of the variable in the code
    expected : type or str
        Expected type of `var`
    """

    def __init__(self, var, varname="", expected=""):
        self.found = str(type(var).__name__)
        self.varname = str(varname)
        self.expected = str(expected)

    def __str__(self):
        msg = "Wrong type{vn:s}{ex:s}{fd:s}"
        return msg.format(vn=" of `" + self.varname + "`:" if len(self.varname) else ":",
                          ex=" expected " + self.expected if len(self.expected) else "",
                          fd=" found " + self.found)


class CPYValueError(CPYError):
    """
    coupy-specific version of a ValueError

    Attributes
    ----------
    legal : str
        Valid value(s) of object
    varname : str
        Name of variable in question
    actual : str
        Actual value of object
    """

    def __init__(self, legal, varname="", actual=""):
        self.legal = str(legal)
        self.varname = str(varname)
        self.actual = str(actual)

    def __str__(self):
        msg = "Invalid value{vn:s}{fd:s} expected {ex:s}"
        return msg.format(vn=" of `" + self.varname + "`:" if len(self.varname) else ":",
                          fd=" '" + self.actual + "';" if len(self.actual) else "",
                          ex=self.legal)


class UnsupportedMethodError(CPYValueError):
    """
    Raised for connectivity method names without an engine

    Attributes
    ----------
    method : str
        The requested method
    available : sequence of str
        The method names that are supported
    """

    def __init__(self, method, available=()):
        self.method = str(method)
        self.available = tuple(available)
        legal = "one of " + ", ".join(f"'{opt}'" for opt in self.available)
        super().__init__(legal, varname="method", actual=self.method)


class UnsupportedModeError(CPYValueError):
    """
    Raised for unknown complex-to-real output conversions

    Attributes
    ----------
    mode : str
        The requested output mode
    available : sequence of str
        The supported output modes
    """

    def __init__(self, mode, available=()):
        self.mode = str(mode)
        self.available = tuple(available)
        legal = "one of " + ", ".join(f"'{opt}'" for opt in self.available)
        super().__init__(legal, varname="output", actual=self.mode)


class ShapeMismatchError(CPYValueError):
    """
    Raised if arrays that have to be aligned do not share their shapes,
    e.g. replicates of different sizes or channel counts differing between
    transfer function, noise covariance and cross spectra
    """

    def __init__(self, legal, varname="", actual=""):
        super().__init__(legal, varname=varname, actual=actual)

    def __str__(self):
        msg = "Shape mismatch{vn:s}{fd:s} expected {ex:s}"
        return msg.format(vn=" of `" + self.varname + "`:" if len(self.varname) else ":",
                          fd=" '" + self.actual + "';" if len(self.actual) else "",
                          ex=self.legal)


class SingularMatrixError(CPYError, np.linalg.LinAlgError):
    """
    Raised when a (batched) matrix inversion hits a singular matrix

    Attributes
    ----------
    msg : str
        Error message to be printed
    """

    def __init__(self, msg):
        self.msg = str(msg)

    def __str__(self):
        return self.msg


def CPYLog(msg, loglevel="INFO", caller=None):
    """
    Log a message with the coupy logger

    Parameters
    ----------
    msg : str
        Message to be logged
    loglevel : str
        One of 'DEBUG', 'IMPORTANT', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'
    caller : None or str
        Issuer of the message. If `None`, name of calling method is
        automatically fetched and pre-pended to `msg`.
    """

    if caller is None:
        caller = sys._getframe().f_back.f_code.co_name
    logger = get_logger()
    logfunc = getattr(logger, loglevel.lower())
    logfunc(f"{caller}: {msg}" if len(caller) else msg)


def CPYWarning(msg, caller=None):
    """
    Standardized coupy warning message, ends up in the log

    Parameters
    ----------
    msg : str
        Warning message
    caller : None or str
        Issuer of warning message. If `None`, name of calling method is
        automatically fetched and pre-pended to `msg`.
    """

    if caller is None:
        caller = sys._getframe().f_back.f_code.co_name
    CPYLog(msg, loglevel="WARNING", caller=caller)


def CPYInfo(msg, caller=None):
    """
    Standardized coupy info message, ends up in the log
    """

    if caller is None:
        caller = sys._getframe().f_back.f_code.co_name
    CPYLog(msg, loglevel="INFO", caller=caller)
