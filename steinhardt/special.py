"""Special functions needed to build and contract spherical harmonics"""
#
#    Copyright 2011 Mathieu Leocmach
#
#    This file is part of steinhardt.
#
#    steinhardt is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    steinhardt is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with steinhardt.  If not, see <http://www.gnu.org/licenses/>.
#
from functools import lru_cache
import logging

import numpy as np
from scipy.special import sph_legendre_p
from sympy import Rational
from sympy.physics.wigner import wigner_3j

logger = logging.getLogger(__name__)


def sph_plm(l, m, x):
    r"""
Normalized associated Legendre function

.. math:: \sqrt{\frac{2\ell+1}{4\pi}\frac{(\ell-m)!}{(\ell+m)!}} P_\ell^m(x)

including the Condon-Shortley phase, so that
:math:`Y_{\ell m}(\theta, \phi) = \mathrm{sph\_plm}(\ell, m, \cos\theta) e^{im\phi}`.

Parameters
----------
l : int
    Degree, non-negative.
m : int or array_like of int
    Order, 0 <= m <= l.
x : float or array_like of floats
    Cosine of the colatitude, in [-1, 1].

Returns
----------
float or array of floats, broadcast from m and x.
"""
    m = np.asarray(m)
    x = np.asarray(x, dtype=np.float64)
    if l < 0 or np.any(m < 0) or np.any(m > l):
        raise ValueError("order m must satisfy 0 <= m <= l, got l=%d, m=%s" % (l, m))
    if np.any(np.abs(x) > 1):
        raise ValueError("argument out of [-1, 1]")
    #first axis holds the derivatives
    return sph_legendre_p(l, m, np.arccos(x))[0]


@lru_cache(maxsize=None)
def wigner3j(two_ja, two_jb, two_jc, two_ma, two_mb, two_mc):
    """Wigner 3j symbol, arguments being twice the angular momenta and twice the magnetic numbers"""
    return float(wigner_3j(
        Rational(two_ja, 2), Rational(two_jb, 2), Rational(two_jc, 2),
        Rational(two_ma, 2), Rational(two_mb, 2), Rational(two_mc, 2)
    ))


@lru_cache(maxsize=None)
def w3j_table(l):
    r"""
Wigner 3j coefficients :math:`\left( \begin{array}{ccc} \ell & \ell & \ell \\ m_1 & m_2 & -m_1-m_2 \end{array} \right)`

Returns
----------
(2*l+1, 2*l+1) read-only array of floats
    Indexed by [m1+l, m2+l]. Zero when |m1+m2| > l.
"""
    logger.debug("tabulating Wigner 3j symbols for l=%d", l)
    table = np.zeros((2*l+1, 2*l+1))
    for m1 in range(-l, l+1):
        for m2 in range(-l, l+1):
            m3 = -m1 - m2
            if -l <= m3 and m3 <= l:
                table[m1+l, m2+l] = wigner3j(2*l, 2*l, 2*l, 2*m1, 2*m2, 2*m3)
    table.flags.writeable = False
    return table
