from math import pi, sqrt
import numpy as np
import pytest
from . import special


def test_sph_plm_pole():
    assert special.sph_plm(2, 0, 1.0) == pytest.approx(sqrt(5 / (4*pi)))
    for m in range(1, 3):
        assert special.sph_plm(2, m, 1.0) == pytest.approx(0, abs=1e-15)


def test_sph_plm_condon_shortley():
    """Y_11 = -sqrt(3/8pi) sin(theta) exp(i phi)"""
    assert special.sph_plm(1, 1, 0.0) == pytest.approx(-sqrt(3 / (8*pi)))
    #P_3^2(x) = 15 x (1-x^2)
    x = 0.3
    assert special.sph_plm(3, 2, x) == pytest.approx(
        sqrt(7 / (4*pi) / 120) * 15 * x * (1 - x**2))


def test_sph_plm_broadcast_orthonormal():
    """2 pi int_{-1}^{1} plm(x)^2 dx = 1"""
    x, weights = np.polynomial.legendre.leggauss(32)
    for l in range(11):
        m = np.arange(l+1)[:, None]
        plm = special.sph_plm(l, m, x[None, :])
        assert plm.shape == (l+1, len(x))
        assert 2 * pi * (plm**2 * weights).sum(-1) == pytest.approx(np.ones(l+1))


def test_sph_plm_domain():
    with pytest.raises(ValueError):
        special.sph_plm(2, 3, 0.5)
    with pytest.raises(ValueError):
        special.sph_plm(2, -1, 0.5)
    with pytest.raises(ValueError):
        special.sph_plm(2, 1, np.array([0.5, 1.5]))


def test_wigner3j():
    assert special.wigner3j(4, 4, 4, 0, 0, 0) == pytest.approx(-sqrt(2/35.))
    assert special.wigner3j(4, 4, 4, 2, -2, 0) == pytest.approx(sqrt(1/70.))
    assert special.wigner3j(4, 4, 4, 4, -4, 0) == pytest.approx(sqrt(2/35.))
    assert special.wigner3j(4, 4, 4, 4, -2, -2) == pytest.approx(-sqrt(3/35.))
    assert special.wigner3j(12, 12, 12, 0, 0, 0) == pytest.approx(-20 * sqrt(1/46189.))
    #half integer angular momenta
    assert special.wigner3j(1, 1, 0, 1, -1, 0) == pytest.approx(1 / sqrt(2))
    #selection rules
    assert special.wigner3j(4, 4, 4, 2, 0, 0) == 0
    assert special.wigner3j(2, 2, 8, 0, 0, 0) == 0
    assert isinstance(special.wigner3j(4, 4, 4, 0, 0, 0), float)


def test_w3j_table():
    l = 4
    table = special.w3j_table(l)
    assert table.shape == (2*l+1, 2*l+1)
    assert not table.flags.writeable
    assert np.all(table == table.T)
    assert table[l, l] == pytest.approx(3 * sqrt(2/1001.))
    #|m1 + m2| > l
    assert table[2*l, l+1] == 0
    assert table[2*l, 0] == pytest.approx(special.wigner3j(8, 8, 8, 8, -8, 0))
    assert special.w3j_table(l) is table


def test_sph_plm_shape():
    assert np.shape(special.sph_plm(2, 1, 0.5)) == ()
    assert special.sph_plm(4, np.arange(5), 0.5).shape == (5,)
    assert special.sph_plm(4, 2, np.linspace(-1, 1, 7)).shape == (7,)
    assert special.sph_plm(4, np.arange(5)[:, None], np.zeros((1, 3))).shape == (5, 3)
