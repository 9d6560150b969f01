''' Value with absolute error (x ± δx) and first-order error propagation

    Usage:

        >>> a = UncertainValue(1.0, 0.1)
        >>> b = UncertainValue(2.0, 0.2)
        >>> str(a + b)
        '3±0.3'
'''
import copy
import math
import operator
import numpy as np

from .common import unitmgr, report


PLUSMINUS = '±'


def _kind(t):
    ''' Type used to compare value and error types. Builtin and numpy numeric
        types compare by their numpy dtype, so float and numpy.float64 are the same.
    '''
    if isinstance(t, type) and issubclass(t, (bool, int, float, complex, np.generic)):
        return np.dtype(t)
    return t


def _typename(t):
    return getattr(t, '__name__', str(t))


def _val(x):
    ''' Underlying value of x, for operations that ignore the error '''
    if isinstance(x, UncertainValue):
        return x.value
    return x


def _format(x, formatspec):
    ''' Apply a %-style format spec to x. %s renders floats in short form (1.0 -> 1) '''
    if formatspec == '%s' and isinstance(x, (float, np.floating)):
        formatspec = '%g'
    return formatspec % (x,)


def _scalar(x):
    ''' Convert x to a Python int or float for saving '''
    if isinstance(x, np.generic):
        x = x.item()
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f'Only int and float values can be saved, got {type(x).__name__}')
    return x


def _coerce(t, x):
    ''' Convert x to type t, refusing conversions that change the number '''
    converted = t(x)
    if converted != x and converted == converted:  # nan never equals itself
        raise TypeError(f'Converting {x!r} to {_typename(t)} changes its value')
    return converted


def _passthrough(op, reflected=False):
    ''' Build an operator method that acts on the plain value, without error '''
    def method(self, other):
        if reflected:
            return op(_val(other), self.value)
        return op(self.value, _val(other))
    method.__name__ = f'__{"r" if reflected else ""}{op.__name__.strip("_")}__'
    return method


class UncertainValue:
    ''' Result of a calculation along with its absolute error (x ± δx).

        Args:
            value: The computed value
            error: Absolute error in value. Must be nonnegative; this is
                asserted (not corrected), so the check is skipped under python -O.
                A nan error passes the check, since nan arithmetic is allowed.

        Arithmetic between two UncertainValues propagates the error to first
        order, assuming independent errors much smaller than the values
        (terms of order δx·δy and δx² are ignored). Multiplication and
        division are only possible when the value and error types are the
        same, as is the default; a TypeError is raised otherwise.

        Everywhere else the UncertainValue acts as its value: float(), int(),
        abs(), comparisons, attribute access, and arithmetic with plain
        numbers all use the value and discard the error.

        Type parameters may be given by subscription. UncertainValue[float]
        has float value and error, UncertainValue[float, int] has float value
        and int error. Arguments and results are converted to these types,
        and a TypeError is raised if the conversion would change a number.
        Without parameters the types are taken from the arguments.
    '''
    _vtype = None
    _etype = None
    _parametrized = {}

    def __class_getitem__(cls, params):
        if cls._vtype is not None:
            raise TypeError(f'{cls.__name__} is already parametrized')
        if not isinstance(params, tuple):
            params = (params,)
        if len(params) == 1:
            params = (params[0], params[0])
        if len(params) != 2:
            raise TypeError('UncertainValue takes one or two type parameters')

        if params not in cls._parametrized:
            vtype, etype = params
            name = f'{cls.__name__}[{_typename(vtype)}, {_typename(etype)}]'
            cls._parametrized[params] = type(name, (cls,), {'_vtype': vtype, '_etype': etype})
        return cls._parametrized[params]

    def __init__(self, value, error):
        self._setfields(value, error)

    def _setfields(self, value, error):
        ''' Set value and error, coercing to the type parameters if defined '''
        if self._vtype is not None:
            value = _coerce(self._vtype, value)
            error = _coerce(self._etype, error)
        self.value = value
        self.error = error
        # nan errors pass, as nan propagates from the arithmetic
        assert not self.error < 0, f'Error must be nonnegative, got {self.error}'

    def __getattr__(self, name):
        # Only called when normal lookup fails. Forward to the value.
        if name.startswith('__') or name in ('value', 'error'):
            raise AttributeError(name)
        return getattr(self.value, name)

    def __repr__(self):
        return f'{type(self).__name__}({self.value!r}, {self.error!r})'

    def __str__(self):
        return self.to_string()

    def __format__(self, spec):
        if not spec:
            return self.to_string()
        value, error, units = self._magnitudes()
        return self._join(format(value, spec), format(error, spec), units)

    def copy(self):
        ''' Get an independent copy '''
        return copy.copy(self)

    @property
    def types(self):
        ''' Tuple of (value type, error type) '''
        if self._vtype is not None:
            return self._vtype, self._etype
        return type(self.value), type(self.error)

    def _check_sametypes(self, rhs, opname):
        ''' Raise TypeError unless value and error have the same type in both operands '''
        for operand in (self, rhs):
            vtype, etype = operand.types
            if _kind(vtype) != _kind(etype):
                raise TypeError(
                    f'{opname} of UncertainValues requires value and error of the same type, '
                    f'got value {_typename(vtype)} and error {_typename(etype)}')

    # Error-aware operators

    def __pos__(self):
        return type(self)(+self.value, self.error)

    def __neg__(self):
        return type(self)(-self.value, self.error)

    def __iadd__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            self._setfields(self.value + rhs, self.error)
            return self
        rvalue, rerror = rhs.value, rhs.error
        self._setfields(self.value + rvalue, self.error + rerror)
        return self

    def __isub__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            self._setfields(self.value - rhs, self.error)
            return self
        rvalue, rerror = rhs.value, rhs.error
        self._setfields(self.value - rvalue, self.error + rerror)
        return self

    def __imul__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            self._setfields(self.value * rhs, self.error)
            return self
        self._check_sametypes(rhs, 'Multiplication')
        rvalue, rerror = rhs.value, rhs.error
        value = self.value * rvalue
        # Error uses the updated value and the original rhs value
        error = abs(value * rerror) + abs(rvalue * self.error)
        self._setfields(value, error)
        return self

    def __itruediv__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            self._setfields(self.value / rhs, self.error)
            return self
        self._check_sametypes(rhs, 'Division')
        rvalue, rerror = rhs.value, rhs.error
        inv = 1 / rvalue
        value = self.value * inv
        error = (self.error + abs(rerror * value * inv)) * abs(inv)
        self._setfields(value, error)
        return self

    def __add__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            return self.value + rhs
        lhs = self.copy()
        lhs += rhs
        return lhs

    def __sub__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            return self.value - rhs
        lhs = self.copy()
        lhs -= rhs
        return lhs

    def __mul__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            return self.value * rhs
        lhs = self.copy()
        lhs *= rhs
        return lhs

    def __truediv__(self, rhs):
        if not isinstance(rhs, UncertainValue):
            return self.value / rhs
        lhs = self.copy()
        lhs /= rhs
        return lhs

    # Operators that act on the value alone

    __radd__ = _passthrough(operator.add, reflected=True)
    __rsub__ = _passthrough(operator.sub, reflected=True)
    __rmul__ = _passthrough(operator.mul, reflected=True)
    __rtruediv__ = _passthrough(operator.truediv, reflected=True)
    __floordiv__ = _passthrough(operator.floordiv)
    __rfloordiv__ = _passthrough(operator.floordiv, reflected=True)
    __mod__ = _passthrough(operator.mod)
    __rmod__ = _passthrough(operator.mod, reflected=True)
    __pow__ = _passthrough(operator.pow)
    __rpow__ = _passthrough(operator.pow, reflected=True)
    __lt__ = _passthrough(operator.lt)
    __le__ = _passthrough(operator.le)
    __gt__ = _passthrough(operator.gt)
    __ge__ = _passthrough(operator.ge)

    def __eq__(self, other):
        if isinstance(other, UncertainValue):
            return bool(self.value == other.value and self.error == other.error)
        return self.value == other

    __hash__ = None  # Mutable through in-place operators

    def __abs__(self):
        return abs(self.value)

    def __float__(self):
        return float(self.value)

    def __int__(self):
        return int(self.value)

    def __index__(self):
        return operator.index(self.value)

    def __complex__(self):
        return complex(self.value)

    def __bool__(self):
        return bool(self.value)

    def __round__(self, ndigits=None):
        if ndigits is None:
            return round(self.value)
        return round(self.value, ndigits)

    def __trunc__(self):
        return math.trunc(self.value)

    def __floor__(self):
        return math.floor(self.value)

    def __ceil__(self):
        return math.ceil(self.value)

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self.value, dtype=dtype)

    # Derived quantities

    @property
    def relative_error(self):
        ''' Relative error |δx/x|. Infinite if value is zero. '''
        if self.value == 0:
            return math.inf
        ratio = abs(self.error / self.value)
        if unitmgr.has_units(ratio):
            ratio = ratio.to(unitmgr.dimensionless).magnitude
        return ratio

    @property
    def units(self):
        ''' Pint units of the value, or None '''
        return unitmgr.get_units(self.value)

    def to(self, units):
        ''' Get a copy converted to new units

            Args:
                units (str or Pint unit): Units to convert value and error to
        '''
        return type(self)(unitmgr.convert(self.value, units),
                          unitmgr.convert(self.error, units))

    # String output

    def _magnitudes(self):
        ''' Get value and error magnitudes, with error in value's units, and the units '''
        value, units = unitmgr.split_units(self.value)
        error = self.error
        if units is not None:
            error = unitmgr.match_units(error, self.value)
        return value, unitmgr.strip_units(error), units

    @staticmethod
    def _join(valstr, errstr, units):
        out = f'{valstr}{PLUSMINUS}{errstr}'
        if units is not None and not unitmgr.is_dimensionless(units):
            out = f'{out} {units}'
        return out

    def to_string(self, formatspec='%s'):
        ''' Get a string representation of the result, as "value±error".

            Args:
                formatspec (str): %-style format spec applied to both value and
                    error, such as '%.8e'. The default renders numbers in natural
                    form ('1±0.1').
        '''
        value, error, units = self._magnitudes()
        return self._join(_format(value, formatspec), _format(error, formatspec), units)

    def string(self, **kwargs):
        ''' Get string representation with the error rounded to n significant
            figures, and the value rounded to the same decimal place.

            Args:
                n (int): Significant figures of the error
                fmt (str): Number format - auto, decimal, sci
                **kwargs: Other arguments passed to report.format_pair
        '''
        value, error, units = self._magnitudes()
        valstr, errstr = report.format_pair(value, error, **kwargs)
        return self._join(valstr, errstr, units)

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.string()

    # Configuration

    def config(self):
        ''' Get configuration dictionary for saving '''
        value, error, units = self._magnitudes()
        return {
            'mode': 'uncertain',
            'value': _scalar(value),
            'error': _scalar(error),
            'units': str(units) if units is not None else None,
        }

    @classmethod
    def from_config(cls, config):
        ''' Create UncertainValue from configuration dictionary '''
        try:
            value, error = config['value'], config['error']
        except (KeyError, TypeError) as exc:
            raise ValueError(f'Invalid UncertainValue configuration: {config}') from exc
        if isinstance(value, str):
            value = float(value)
        if isinstance(error, str):
            error = float(error)
        units = config.get('units')
        return cls(unitmgr.make_quantity(value, units),
                   unitmgr.make_quantity(error, units))


def uncertain(value, error):
    ''' Make an UncertainValue from value and absolute error '''
    return UncertainValue(value, error)
