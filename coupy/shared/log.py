# -*- coding: utf-8 -*-
#
# coupy logger, console and log file
#

import os
import sys
import logging
import warnings
import datetime
import platform
import coupy


loggername = "coupy"
loglevels = ['DEBUG', 'IMPORTANT', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def setup_logging(cpydir=None, session=""):
    """
    Attach console and file handlers to the ``coupy`` logger, called
    once by ``coupy/__init__.py``

    The log file ``coupy.log`` goes to ``$COUPYLOGDIR`` or ``<cpydir>/logs``,
    the level is read from ``$COUPYLOGLEVEL`` (default ``'IMPORTANT'``).
    File records carry the host name and the `session` id.
    """

    # between INFO and WARNING
    _addLoggingLevel('IMPORTANT', logging.WARNING - 5)

    if os.environ.get("COUPYLOGDIR"):
        coupy.__logdir__ = os.path.abspath(os.path.expanduser(os.environ["COUPYLOGDIR"]))
    else:
        if cpydir is not None:
            coupy.__logdir__ = os.path.join(cpydir, "logs")
        else:
            coupy.__logdir__ = os.path.join(os.path.expanduser("~"), ".coupy", "logs")

    if not os.path.exists(coupy.__logdir__):
        os.makedirs(coupy.__logdir__, exist_ok=True)

    loglevel = os.getenv("COUPYLOGLEVEL", "IMPORTANT")
    numeric_level = getattr(logging, loglevel.upper(), None)
    if not isinstance(numeric_level, int):
        warnings.warn(f"Unknown level '{loglevel}' in COUPYLOGLEVEL, using IMPORTANT. "
                      f"Valid levels are {loglevels}.")
        loglevel = "IMPORTANT"

    class HostnameFilter(logging.Filter):
        hostname = platform.node()

        def filter(self, record):
            record.hostname = HostnameFilter.hostname
            return True

    class SessionFilter(logging.Filter):
        def filter(self, record):
            record.session = session
            return True

    cpy_logger = logging.getLogger(loggername)

    # re-imports (e.g. `importlib.reload`) must not stack up handlers
    if cpy_logger.handlers:
        return

    datefmt_interactive = '%H:%M:%S'
    datefmt_file = "%Y-%m-%d %H:%M:%S"

    fmt_interactive = logging.Formatter('%(asctime)s - %(levelname)s: %(message)s', datefmt_interactive)
    fmt_with_hostname = logging.Formatter('%(asctime)s - %(levelname)s - %(hostname)s - %(session)s: %(message)s',
                                          datefmt_file)

    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt_interactive)
    cpy_logger.addHandler(sh)

    logfile = os.path.join(coupy.__logdir__, 'coupy.log')
    # appends
    fh = logging.FileHandler(logfile)
    fh.addFilter(HostnameFilter())
    fh.addFilter(SessionFilter())
    fh.setFormatter(fmt_with_hostname)
    cpy_logger.addHandler(fh)

    cpy_logger.setLevel(loglevel.upper())
    cpy_logger.info(f"Starting coupy session at {datetime.datetime.now().astimezone().isoformat()}.")
    cpy_logger.debug(f"coupy logger '{loggername}' setup to log to file '{logfile}' at level {loglevel}.")


def _addLoggingLevel(levelName, levelNum, methodName=None):
    """
    Register `levelName` with :mod:`logging` and add the logger method
    `methodName` (default ``levelName.lower()``) for it

    Registering the same level again is a no-op, a clash with an
    existing name raises `AttributeError`.
    """
    if not methodName:
        methodName = levelName.lower()

    if hasattr(logging, levelName) and hasattr(logging, methodName) and hasattr(logging.getLoggerClass(), methodName):
        return

    if hasattr(logging, levelName):
        raise AttributeError('{} already defined in logging module'.format(levelName))
    if hasattr(logging, methodName):
        raise AttributeError('{} already defined in logging module'.format(methodName))
    if hasattr(logging.getLoggerClass(), methodName):
        raise AttributeError('{} already defined in logger class'.format(methodName))

    def logForLevel(self, message, *args, **kwargs):
        if self.isEnabledFor(levelNum):
            self._log(levelNum, message, args, **kwargs)

    def logToRoot(message, *args, **kwargs):
        logging.log(levelNum, message, *args, **kwargs)

    logging.addLevelName(levelNum, levelName)
    setattr(logging, levelName, levelNum)
    setattr(logging.getLoggerClass(), methodName, logForLevel)
    setattr(logging, methodName, logToRoot)


def get_logger():
    """The ``coupy`` logger"""
    return logging.getLogger(loggername)


def set_loglevel(level):
    """
    Set the level of the ``coupy`` logger

    Parameters
    ----------
    level : str
        One of :data:`loglevels`, case insensitive
    """
    # errors.py imports this module
    from coupy.shared.errors import CPYValueError

    if str(level).upper() not in loglevels:
        raise CPYValueError(f"one of {loglevels}", varname="level", actual=level)
    get_logger().setLevel(level.upper())


def delete_all_logfiles(silent=True):
    """
    Remove every ``*.log`` file from ``coupy.__logdir__``, returns
    the number of deleted files
    """
    logdir = coupy.__logdir__
    num_deleted = 0
    if os.path.isdir(logdir):
        for fname in sorted(os.listdir(logdir)):
            if not fname.endswith(".log"):
                continue
            logfile = os.path.join(logdir, fname)
            try:
                os.remove(logfile)
                num_deleted += 1
            except OSError as ex:
                warnings.warn(f"Could not delete log file '{logfile}': {ex}")
    if not silent:
        print(f"Deleted {num_deleted} log files from '{logdir}'.")
    return num_deleted
