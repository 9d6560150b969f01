''' Test cases for UncertainValue arithmetic and error propagation '''
import math
import pytest

import numpy as np

from uncval import UncertainValue, uncertain


def test_unary():
    ''' Unary plus is identity, minus negates value only '''
    r1 = UncertainValue(1.0, 0.1)
    assert +r1 == r1

    ra = -r1
    assert ra.value == -1.0
    assert ra.error == 0.1
    assert isinstance(ra, UncertainValue)


def test_addsub():
    ''' Errors sum for both addition and subtraction '''
    r1 = UncertainValue(1.0, 0.1)
    r2 = UncertainValue(2.0, 0.2)

    rb = r1 + r2
    assert abs(rb.value - 3.0) < np.finfo(float).eps
    assert abs(rb.error - 0.3) < np.finfo(float).eps

    rc = r1 - r2
    assert abs(rc.value + 1.0) < np.finfo(float).eps
    assert abs(rc.error - 0.3) < np.finfo(float).eps

    # Operands are not modified
    assert r1.value == 1.0 and r1.error == 0.1
    assert r2.value == 2.0 and r2.error == 0.2

    np.random.seed(0)
    for _ in range(20):
        a = UncertainValue(np.random.uniform(-10, 10), np.random.uniform(0, 1))
        b = UncertainValue(np.random.uniform(-10, 10), np.random.uniform(0, 1))
        assert (a + b).error == a.error + b.error
        assert (a - b).error == a.error + b.error


def test_mul():
    ''' Multiplication error uses the updated value in the first term '''
    r1 = UncertainValue(1.0, 0.1)
    r2 = UncertainValue(2.0, 0.2)
    rd = r1 * r2
    assert np.isclose(rd.value, 2.0)
    assert np.isclose(rd.error, abs(2.0*0.2) + abs(2.0*0.1))
    assert r1.value == 1.0  # Operand not modified

    # Negative values give nonnegative error
    rn = UncertainValue(-3.0, 0.1) * UncertainValue(2.0, 0.5)
    assert np.isclose(rn.value, -6.0)
    assert np.isclose(rn.error, 6.0*0.5 + 2.0*0.1)


def test_div():
    ''' Division as multiplication by reciprocal '''
    r1 = UncertainValue(1.0, 0.1)
    r2 = UncertainValue(2.0, 0.2)
    re = r1 / r2
    assert np.isclose(re.value, 0.5)
    assert np.isclose(re.error, (0.1 + abs(0.2*0.5*0.5))*0.5)

    rn = UncertainValue(3.0, 0.3) / UncertainValue(-4.0, 0.4)
    inv = -0.25
    assert np.isclose(rn.value, -0.75)
    assert np.isclose(rn.error, (0.3 + abs(0.4*-0.75*inv))*abs(inv))


def test_inplace():
    ''' Compound assignment updates the instance in place '''
    x = UncertainValue(1.0, 0.1)
    y = UncertainValue(2.0, 0.2)
    xid = id(x)
    x += y
    assert id(x) == xid
    assert np.isclose(x.value, 3.0)
    assert np.isclose(x.error, 0.3)
    x -= y
    assert np.isclose(x.value, 1.0)
    assert np.isclose(x.error, 0.5)
    x *= y
    assert np.isclose(x.value, 2.0)
    assert np.isclose(x.error, 2.0*0.2 + 2.0*0.5)
    x /= y
    assert id(x) == xid
    assert np.isclose(x.value, 1.0)

    # Same object on both sides uses the original rhs value
    z = UncertainValue(2.0, 0.1)
    z *= z
    assert np.isclose(z.value, 4.0)
    assert np.isclose(z.error, 4.0*0.1 + 2.0*0.1)

    # Plain operand changes value only
    w = UncertainValue(1.0, 0.1)
    w += 1.0
    assert isinstance(w, UncertainValue)
    assert w.value == 2.0
    assert w.error == 0.1


def test_copy():
    a = UncertainValue(1.0, 0.1)
    b = a.copy()
    b += UncertainValue(1.0, 0.1)
    assert a.value == 1.0 and a.error == 0.1
    assert b.value == 2.0


def test_types():
    ''' Multiplication and division need the same value and error types '''
    a = UncertainValue(1.0, 1)
    b = UncertainValue(2.0, 0.2)
    with pytest.raises(TypeError, match='same type'):
        a * b
    with pytest.raises(TypeError, match='same type'):
        b / a
    with pytest.raises(TypeError):
        b *= a

    # Addition allowed with any types
    c = a + b
    assert np.isclose(c.value, 3.0)
    assert np.isclose(c.error, 1.2)

    # Python and numpy floats are the same type
    d = UncertainValue(np.float64(1.0), 0.1) * UncertainValue(2.0, np.float64(0.2))
    assert np.isclose(d.value, 2.0)

    # Integers work too
    e = UncertainValue(3, 1) * UncertainValue(2, 1)
    assert e.value == 6
    assert e.error == 6 + 2


def test_parametrized():
    ''' Type parameters by subscription '''
    rr = UncertainValue[float]
    assert rr is UncertainValue[float]
    assert issubclass(rr, UncertainValue)
    r = rr(1, 0)
    assert isinstance(r.value, float)
    assert isinstance(r.error, float)
    assert r.types == (float, float)
    assert repr(r) == 'UncertainValue[float, float](1.0, 0.0)'
    assert isinstance(r * rr(2, 0.5), rr)

    rri = UncertainValue[float, int]
    ri = rri(1.5, 2)
    assert ri.error == 2
    assert isinstance(ri.error, int)
    assert isinstance(ri + rri(1, 1), rri)
    with pytest.raises(TypeError):
        ri * rri(1, 1)


def test_parametrized_lossy():
    ''' Conversions to the type parameters that would change a number raise '''
    rri = UncertainValue[float, int]
    with pytest.raises(TypeError):
        rri(1.5, 2.7)
    with pytest.raises(TypeError):
        UncertainValue[int](1.5, 1)

    # Adding a float error can't silently truncate to 0
    with pytest.raises(TypeError):
        rri(1.0, 0) + UncertainValue(1.0, 0.9)
    x = rri(1.0, 0)
    with pytest.raises(TypeError):
        x += UncertainValue(1.0, 0.9)
    assert rri(1.0, 0) + UncertainValue(1.0, 1.0) == UncertainValue(2.0, 1)

    # Integer division results aren't truncated either
    ri = UncertainValue[int]
    with pytest.raises(TypeError):
        ri(3, 1) / ri(2, 1)
    assert ri(4, 0) / ri(2, 0) == UncertainValue(2, 0)

    r = UncertainValue[float](np.nan, np.nan)
    assert math.isnan(r.value)
    assert math.isnan(r.error)

    with pytest.raises(TypeError):
        UncertainValue[float][int]
    with pytest.raises(TypeError):
        UncertainValue[float, float, float]


def test_invariant():
    ''' Negative errors are asserted, never corrected '''
    with pytest.raises(AssertionError):
        UncertainValue(1.0, -0.1)

    x = UncertainValue(1.0, 0.1)
    with pytest.raises(AssertionError):
        x.error = -1
        x += UncertainValue(1.0, 0.1)


def test_nan_error():
    ''' Non-finite arithmetic gives a nan error, which is not negative '''
    r = UncertainValue(math.inf, 0.0) * UncertainValue(0.0, 0.0)
    assert math.isnan(r.value)
    assert math.isnan(r.error)

    r = UncertainValue(math.nan, 0.1) + UncertainValue(1.0, math.nan)
    assert math.isnan(r.error)
    assert UncertainValue(1.0, math.nan).string() == '1.0±nan'


def test_index():
    ''' Integer values can be used as indices '''
    x = UncertainValue(1, 0)
    assert [10, 20, 30][x] == 20
    assert list(range(UncertainValue(3, 0))) == [0, 1, 2]
    assert hex(UncertainValue(255, 1)) == '0xff'
    with pytest.raises(TypeError):
        [10, 20, 30][UncertainValue(1.5, 0.1)]


def test_divzero():
    ''' Division by zero fails the same way the value type does '''
    with pytest.raises(ZeroDivisionError):
        UncertainValue(1.0, 0.1) / UncertainValue(0.0, 0.1)

    with pytest.warns(RuntimeWarning):
        r = UncertainValue(np.float64(1.0), np.float64(0.1)) / UncertainValue(np.float64(0.0), np.float64(0.1))
    assert np.isinf(r.value)


def test_transparent():
    ''' UncertainValue acts as its value outside of error-aware operations '''
    x = UncertainValue(1.5, 0.1)
    assert float(x) == 1.5
    assert int(x) == 1
    assert complex(x) == 1.5
    assert round(x) == 2
    assert round(x, 1) == 1.5
    assert math.floor(x) == 1
    assert math.ceil(x) == 2
    assert math.trunc(x) == 1
    assert abs(UncertainValue(-1.5, 0.1)) == 1.5
    assert bool(x)
    assert not UncertainValue(0.0, 0.1)
    assert math.sqrt(UncertainValue(4.0, 0.1)) == 2.0
    assert np.isclose(x, 1.5)
    assert np.asarray(x) == 1.5

    # Attribute access goes to the value
    assert not x.is_integer()
    assert x.real == 1.5

    # Arithmetic with plain numbers gives plain numbers
    y = x + 1
    assert y == 2.5
    assert not isinstance(y, UncertainValue)
    assert 1 + x == 2.5
    assert x - 1 == 0.5
    assert 2 - x == 0.5
    assert x * 2 == 3.0
    assert 3 / x == 2.0
    assert x ** 2 == 2.25
    assert 2 ** UncertainValue(2.0, 0.1) == 4.0
    assert x // 1 == 1.0
    assert x % 1 == 0.5

    # Comparisons
    assert x == 1.5
    assert x != 1.6
    assert x < 2
    assert x <= 1.5
    assert x > UncertainValue(1.0, 5)
    assert x >= 1
    assert UncertainValue(1.5, 0.1) != UncertainValue(1.5, 0.2)
    assert sorted([UncertainValue(3.0, 0.1), x])[0] is x

    with pytest.raises(TypeError):
        hash(x)
    with pytest.raises(AttributeError):
        x.not_an_attribute


def test_relative():
    assert np.isclose(UncertainValue(2.0, 0.1).relative_error, 0.05)
    assert np.isclose(UncertainValue(-2.0, 0.1).relative_error, 0.05)
    assert UncertainValue(0.0, 0.1).relative_error == math.inf


def test_tostring():
    ''' String formatting '''
    r1 = UncertainValue(1.0, 0.1)
    assert r1.to_string() == '1±0.1'
    assert str(r1) == '1±0.1'

    r2 = UncertainValue(0.123456789, 0.00123456789)
    assert r2.to_string('%.8e') == '1.23456789e-01±1.23456789e-03'

    assert str(UncertainValue(1.0, 0.1) + UncertainValue(2.0, 0.2)) == '3±0.3'
    assert UncertainValue(3, 1).to_string() == '3±1'
    assert UncertainValue(1.0, 0.1).to_string('%.3f') == '1.000±0.100'
    assert f'{r1:.2f}' == '1.00±0.10'
    assert f'{r1}' == '1±0.1'
    assert repr(r1) == 'UncertainValue(1.0, 0.1)'


def test_sigfigs():
    ''' Significant figure formatting matching the error precision '''
    assert UncertainValue(1.0, 0.1).string() == '1.00±0.10'
    assert UncertainValue(1.23456, 0.0123).string(n=1) == '1.23±0.01'
    assert UncertainValue(1.0, 0.1)._repr_markdown_() == '1.00±0.10'


def test_factory():
    x = uncertain(1.0, 0.1)
    assert isinstance(x, UncertainValue)
    assert x.value == 1.0
    assert x.error == 0.1
