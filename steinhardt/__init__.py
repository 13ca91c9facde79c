#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
A Python package to compute the global Ql and Wl bond orientational
order parameters of a cluster as defined by Steinhardt Physical Review B (1983)
doi:10.1103/PhysRevB.28.784.
"""

__version__ = "1.0.0"

from .special import sph_plm, wigner3j, w3j_table
from .steinhardt import qlm, qsum, ql, wl, order_parameters
from .steinhardt import OrderParameters, DomainError
