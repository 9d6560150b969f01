''' An interval [a, b] along the real line, where either endpoint may be infinite

    Usage:

        >>> i1 = interval(1, 5)
        >>> i1.length
        4
        >>> interval(0, float('inf')).isinfinite
        True
'''
import logging
import math
import numbers
import numpy as np

from .common import unitmgr


def _check_endpoint(x):
    ''' Raise TypeError if x can't be used as an interval endpoint '''
    mag = unitmgr.strip_units(x)
    if isinstance(mag, (bool, np.bool_, complex, np.complexfloating, np.unsignedinteger)):
        raise TypeError(f'Interval endpoints must be signed real numbers, got {type(mag).__name__}')


def _common_type(a, b):
    ''' Convert a and b to their common numeric type.

        Python scalars stay Python scalars (int with int stays int, float with
        any real becomes float). Numpy scalars follow numpy type promotion,
        with Python ints and floats taken as 64-bit.
        Pint quantities are converted to the units of the first endpoint
        that has units.
    '''
    if unitmgr.has_units(a):
        return a, unitmgr.match_units(b, a)
    if unitmgr.has_units(b):
        return unitmgr.match_units(a, b), b

    if isinstance(a, np.generic) or isinstance(b, np.generic):
        dtype = np.result_type(np.asarray(a), np.asarray(b))  # Python scalars as 64-bit, not weak
        if dtype.kind == 'O':
            return a, b
        return dtype.type(a), dtype.type(b)

    if ((isinstance(a, float) or isinstance(b, float))
            and isinstance(a, numbers.Real) and isinstance(b, numbers.Real)):
        return float(a), float(b)
    return a, b


class Interval:
    ''' An interval [a, b] along the real line. Either endpoint may be
        infinite, and a > b is allowed (an unordered interval).

        Args:
            a: First endpoint
            b: Second endpoint
    '''
    def __init__(self, a, b):
        _check_endpoint(a)
        _check_endpoint(b)
        self.a = a
        self.b = b

    def __repr__(self):
        return f'<Interval: {str(self)}>'

    def __str__(self):
        return f'[{self.a}, {self.b}]'

    def __iter__(self):
        ''' Allow unpacking the endpoints '''
        return iter((self.a, self.b))

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self.a == other.a and self.b == other.b)

    __hash__ = None  # order() changes the endpoints

    def __contains__(self, x):
        return self.contains(x)

    @property
    def length(self):
        ''' Length of the interval, b - a. Negative if unordered. '''
        return self.b - self.a

    @property
    def isinfinite(self) -> bool:
        ''' Determine whether the interval is infinite. This is true if
            a is infinite and b finite, a is finite and b infinite, or a and b
            are infinite with opposite sign. Always False for integer endpoints.

            Both endpoints infinite with the same sign gives a length of
            inf - inf = nan, which is not infinite.
        '''
        length = unitmgr.strip_units(self.length)
        if isinstance(length, numbers.Integral):
            return False
        if math.isnan(length):
            logging.debug('Interval %s has nan length', self)
            return False
        return math.isinf(length)

    @property
    def isordered(self) -> bool:
        ''' Determine whether this is an ordered interval, a <= b '''
        return bool(self.a <= self.b)

    def order(self):
        ''' If a > b, swap the endpoints '''
        if self.a > self.b:
            self.a, self.b = self.b, self.a

    def contains(self, x) -> bool:
        ''' Check whether x is contained in the interval, i.e. whether
            a <= x <= b or b <= x <= a.
        '''
        return bool((self.a <= x <= self.b) or (self.b <= x <= self.a))

    def config(self) -> dict:
        ''' Get configuration for an Interval. Endpoints are saved as strings
            so infinities are preserved.
        '''
        a, units = unitmgr.split_units(self.a)
        b = unitmgr.strip_units(unitmgr.match_units(self.b, self.a))
        for x in (a, b):
            if isinstance(x, bool) or not isinstance(x, (int, float, np.integer, np.floating)):
                raise TypeError(f'Only int and float endpoints can be saved, got {type(x).__name__}')
        return {
            'mode': 'interval',
            'a': str(a),
            'b': str(b),
            'units': str(units) if units is not None else None,
        }

    @classmethod
    def from_config(cls, config: dict):
        ''' Create Interval from configuration '''
        def _parse(s):
            if isinstance(s, numbers.Real) and not isinstance(s, bool):
                return s
            try:
                return int(s)
            except ValueError:
                return float(s)

        try:
            a = _parse(config.get('a', '-inf'))
            b = _parse(config.get('b', 'inf'))
        except (ValueError, TypeError, AttributeError) as exc:
            raise ValueError(f'Invalid Interval configuration: {config}') from exc
        units = config.get('units')
        return cls(unitmgr.make_quantity(a, units), unitmgr.make_quantity(b, units))


def interval(a, b):
    ''' Make an Interval from two endpoints, converted to their common type '''
    return Interval(*_common_type(a, b))
