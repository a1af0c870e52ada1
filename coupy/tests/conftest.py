# -*- coding: utf-8 -*-
#
# central pytest configuration
#

# Builtin/3rd party package imports
import os
import numpy as np
import pytest

# no greeting for every test session
os.environ.setdefault("COUPYSILENTSTARTUP", "1")

from coupy.tests.helpers import test_seed


@pytest.fixture
def rng():
    """Seeded random generator, every test gets the same numbers"""
    return np.random.default_rng(test_seed)
