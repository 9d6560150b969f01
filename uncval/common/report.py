''' Significant-figure formatting of a value with its uncertainty.

    The uncertainty is rounded to a few significant figures, and the value
    is printed to the same decimal place, per GUM guidance.
'''
import numpy as np


# Defaults if kwargs aren't provided
default_sigfigs = 2
default_numformat = 'auto'
default_thresh = 5
default_E = True
default_figlimit = 10

numfmts = ['auto', 'decimal', 'sci', 'scientific']


def _exponent(x):
    ''' Exponent of x written in scientific notation '''
    return int(np.floor(np.log10(abs(x))))


def _usable(x):
    return x != 0 and np.isfinite(x)


def _lastplace(value, error, n, figlimit):
    ''' Power of ten of the last printed digit, shared by value and error '''
    if _usable(error):
        place = _exponent(error) - (n-1)
        # Rounding may carry into a new digit (0.0996 -> 0.10)
        place = _exponent(np.round(error, -place)) - (n-1)
    elif _usable(value):
        place = _exponent(value) - (n-1)
    else:
        return -(n-1)

    if _usable(value):
        place = max(place, _exponent(value) - (figlimit-1))
    return place


def _decimal(x, place):
    if not np.isfinite(x):
        return format(x)  # 'nan' or 'inf'
    return f'{np.round(x, -place):.{max(0, -place)}f}'


def _sci(x, place, echr):
    if not np.isfinite(x):
        return format(x)
    exp = _exponent(x) if x != 0 else place
    figs = max(1, exp - place + 1)
    return f'{x:.{figs-1}{echr}}'


def format_pair(value, error, n=None, fmt=None, thresh=None, elower=None, figlimit=None):
    ''' Format a value and its uncertainty to matching precision

        Args:
            value (float): The value
            error (float): Uncertainty in the value
            n (int): Significant figures of the error. If error is zero or not
                finite, significant figures of the value.
            fmt (string): Number format - auto, decimal, or sci. Auto uses
                scientific notation when the value is above 10**thresh or
                below 10**-thresh.
            thresh (int): Exponent threshold for scientific notation in auto format
            elower (bool): Use lowercase "e" in scientific notation
            figlimit (int): Maximum significant figures printed for the value

        Returns:
            valstr (string): Formatted value
            errstr (string): Formatted error
    '''
    n = default_sigfigs if n is None else n
    fmt = (default_numformat if fmt is None else fmt).lower()
    thresh = default_thresh if thresh is None else thresh
    elower = default_E if elower is None else elower
    figlimit = default_figlimit if figlimit is None else figlimit

    if fmt not in numfmts:
        raise ValueError(f'Number Format must be one of {", ".join(numfmts)}')
    if n < 1:
        raise ValueError('Significant Figures must be >= 1')

    value = float(value)
    error = float(error)
    place = _lastplace(value, error, n, figlimit)

    if fmt == 'auto':
        fmt = 'decimal'
        size = value if _usable(value) else error
        if _usable(size) and (abs(size) >= 10**thresh or abs(size) < 10**-thresh):
            fmt = 'sci'

    if fmt == 'decimal':
        return _decimal(value, place), _decimal(error, place)

    echr = 'e' if elower else 'E'
    return _sci(value, place, echr), _sci(error, place, echr)
