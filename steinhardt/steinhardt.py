"""Computation of global bond orientational order of a cluster"""
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
from collections import namedtuple
from math import isfinite, pi, sqrt
import logging
import numbers
import operator

import numpy as np
from numba import jit, vectorize

from .special import sph_plm, w3j_table

logger = logging.getLogger(__name__)

OrderParameters = namedtuple('OrderParameters', ['l', 'count', 'Ql', 'Wl'])


class DomainError(ValueError):
    """Input outside of the domain where order parameters are defined"""


@vectorize(['float64(float64, float64)'])
def abs2(re, im):
    """squared norm of a complex number given its real and imaginary parts"""
    return re**2 + im**2


def _check_order(l):
    if isinstance(l, bool) or not isinstance(l, numbers.Integral) or l < 0:
        raise DomainError("l must be a non-negative integer, got %r" % (l,))
    return int(l)


def _check_cutoff(rc):
    try:
        rc = float(rc)
    except (TypeError, ValueError):
        raise DomainError("cutoff radius must be a number, got %r" % (rc,))
    if not isfinite(rc) or rc <= 0:
        raise DomainError("cutoff radius must be positive and finite, got %r" % rc)
    return rc


def _as_positions(pos):
    try:
        pos = np.asarray(pos, dtype=np.float64)
    except (TypeError, ValueError):
        raise DomainError("positions must be an (N, 3) array of numbers")
    if pos.size == 0:
        return np.zeros((0, 3))
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise DomainError("positions must be of shape (N, 3), got %s" % (pos.shape,))
    if not np.all(np.isfinite(pos)):
        raise DomainError("positions must be finite")
    return np.ascontiguousarray(pos)


def _as_coefficients(l, qlm_re, qlm_im):
    qlm_re = np.ascontiguousarray(qlm_re, dtype=np.float64)
    qlm_im = np.ascontiguousarray(qlm_im, dtype=np.float64)
    if qlm_re.shape != (l+1,) or qlm_im.shape != (l+1,):
        raise DomainError(
            "coefficient arrays must be of length l+1=%d, got %s and %s" % (
                l+1, qlm_re.shape, qlm_im.shape))
    return qlm_re, qlm_im


@jit(nopython=True) #brute force, each pair once
def bond_vectors(pos, rc):
    """Vectors r_i - r_j (j < i) between all pairs closer than rc"""
    rc2 = rc * rc
    n = pos.shape[0]
    vectors = []
    count = 0
    for i in range(1, n):
        for j in range(i):
            dx = pos[i, 0] - pos[j, 0]
            dy = pos[i, 1] - pos[j, 1]
            dz = pos[i, 2] - pos[j, 2]
            if dx*dx + dy*dy + dz*dz < rc2:
                vectors.append(dx)
                vectors.append(dy)
                vectors.append(dz)
                count += 1
    return np.array(vectors, np.float64).reshape((count, 3))


def qlm(l, pos, rc):
    r"""
Sum of the spherical harmonics of degree l over all bonds of a cluster

.. math:: q_{\ell m} = \sum_{|\mathbf{r}_{ij}| < r_c} Y_{\ell m}(\theta_{ij}, \phi_{ij})

Only :math:`m \geq 0` are computed, negative m are given by
:math:`q_{\ell, -m} = (-1)^m q_{\ell m}^*`.

Parameters
----------
l : int
    A non-negative integer indicating the order of symmetry.
pos : (N, 3) array of floats
    Spatial coordinates
rc : float
    Cutoff radius. Only pairs strictly closer than rc are bonded.

Returns
----------
count : int
    Number of bonds
qlm_re, qlm_im : (l+1) arrays of floats
    Real and imaginary parts of :math:`q_{\ell m}` for m = 0..l
"""
    l = _check_order(l)
    rc = _check_cutoff(rc)
    pos = _as_positions(pos)
    qlm_re = np.zeros(l+1)
    qlm_im = np.zeros(l+1)
    vectors = bond_vectors(pos, rc)
    count = len(vectors)
    logger.debug("l=%d: %d bonds among %d positions", l, count, len(pos))
    if count == 0:
        return 0, qlm_re, qlm_im
    r = np.sqrt((vectors**2).sum(-1))
    if np.any(r == 0):
        raise DomainError("coincident positions, bond direction is undefined")
    #colatitude and azimuth, atan2(0, 0) is 0 for bonds along z
    cost = np.clip(vectors[:, 2] / r, -1.0, 1.0)
    phi = np.arctan2(vectors[:, 1], vectors[:, 0])
    m = np.arange(l+1)[:, None]
    plm = sph_plm(l, m, cost[None, :])
    qlm_re[:] = (plm * np.cos(m * phi)).sum(-1)
    #m=0 is real
    qlm_im[1:] = (plm[1:] * np.sin(m[1:] * phi)).sum(-1)
    return count, qlm_re, qlm_im


def qsum(l, qlm_re, qlm_im):
    r"""
Norm of the tensorial order parameter

.. math:: q_{sum} = \sqrt{\sum_{m=-\ell}^{\ell} |q_{\ell m}|^2}

used to normalize :math:`W_\ell = w_\ell / q_{sum}^3`.
"""
    l = _check_order(l)
    qlm_re, qlm_im = _as_coefficients(l, qlm_re, qlm_im)
    q = 2 * abs2(qlm_re[1:], qlm_im[1:]).sum() + qlm_re[0]**2
    return float(np.sqrt(q))


def ql(l, count, qlm_re, qlm_im):
    r"""
Second order rotational invariant of the bond orientational order of l-fold symmetry

.. math::  Q_\ell = \frac{1}{N} \sqrt{\frac{4\pi}{2\ell+1} \sum_{m=-\ell}^{\ell} |q_{\ell m}|^2 }

Parameters
----------
l : int
count : int
    Number of bonds N, as returned by qlm.
    A zero count raises ZeroDivisionError.
qlm_re, qlm_im : (l+1) arrays of floats
    As returned by qlm.

Returns
----------
float
"""
    count = operator.index(count)
    if count < 0:
        raise DomainError("bond count must be non-negative, got %d" % count)
    return qsum(l, qlm_re, qlm_im) * sqrt(4*pi / (2*l+1)) / count


@jit(nopython=True)
def get_qlm(qlm_re, qlm_im, m):
    """qlm coefficients are redundant, negative m are obtained from positive m"""
    if m >= 0:
        return qlm_re[m], qlm_im[m]
    if (-m) % 2 == 0:
        return qlm_re[-m], -qlm_im[-m]
    return -qlm_re[-m], qlm_im[-m]


@jit(nopython=True)
def _contract(w3j, qlm_re, qlm_im):
    l = qlm_re.shape[0] - 1
    w = 0.0
    for m1 in range(-l, l+1):
        x1, y1 = get_qlm(qlm_re, qlm_im, m1)
        for m2 in range(-l, l+1):
            m3 = -m1 - m2
            if -l <= m3 and m3 <= l:
                x2, y2 = get_qlm(qlm_re, qlm_im, m2)
                x3, y3 = get_qlm(qlm_re, qlm_im, m3)
                #real part of q_m1 q_m2 q_m3
                w += w3j[m1+l, m2+l] * (
                    x1*x2*x3 - x1*y2*y3 - x2*y1*y3 - x3*y2*y1
                )
    return w


def wl(l, qlm_re, qlm_im):
    r"""
Third order rotational invariant of the bond orientational order of l-fold symmetry

.. math::  w_\ell = \sum_{m_1+m_2+m_3=0}
		\left( \begin{array}{ccc}
			\ell & \ell & \ell \\
			m_1 & m_2 & m_3
		\end{array} \right)
		q_{\ell m_1} q_{\ell m_2} q_{\ell m_3}

Not normalized: :math:`W_\ell = w_\ell / q_{sum}^3`, see qsum.

Parameters
----------
l : int
qlm_re, qlm_im : (l+1) arrays of floats
    As returned by qlm.

Returns
----------
float
"""
    l = _check_order(l)
    qlm_re, qlm_im = _as_coefficients(l, qlm_re, qlm_im)
    return float(_contract(w3j_table(l), qlm_re, qlm_im))


def order_parameters(pos, rc, ls=(2, 4, 6, 8, 10), tolerance=1e-3):
    """
Global order parameters Ql and Wl of a cluster for several l.

Parameters
----------
pos : (N, 3) array of floats
    Spatial coordinates
rc : float
    Cutoff radius.
ls : sequence of int
    The orders of symmetry to compute.
tolerance : float or None
    When qsum is not above tolerance, Ql and Wl are reported as 0.
    If None, no guard: a cluster without bonds raises ZeroDivisionError.

Returns
----------
list of OrderParameters(l, count, Ql, Wl), in the order of ls
"""
    pos = _as_positions(pos)
    results = []
    for l in ls:
        count, qlm_re, qlm_im = qlm(l, pos, rc)
        qss = qsum(l, qlm_re, qlm_im)
        if tolerance is not None and qss <= tolerance:
            logger.info(
                "l=%d: qsum=%g below tolerance %g (%d bonds), Ql and Wl set to 0",
                l, qss, tolerance, count)
            results.append(OrderParameters(l, count, 0.0, 0.0))
            continue
        results.append(OrderParameters(
            l, count,
            ql(l, count, qlm_re, qlm_im),
            wl(l, qlm_re, qlm_im) / qss**3
        ))
    return results
