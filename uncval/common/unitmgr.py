''' Functions for handling units registry with Pint.

    All uncertain values and intervals must use a common UnitRegistry instance.
'''
import logging
import pint

ureg = pint.UnitRegistry(autoconvert_offset_to_baseunit=True)
pint.set_application_registry(ureg)  # Allows loading pickles containing pint units
_uregcustom = []  # List of custom unit definitions


Quantity = ureg.Quantity
dimensionless = ureg.dimensionless
parse_units = ureg.parse_units


def register_units(unitdefs):
    ''' Register unit definitions with Pint's Unit Registry. Return error string
        if a unit definition can't be parsed.

        Args:
            unitdefs (str): Newline-separated Pint unit definitions
    '''
    global _uregcustom
    errmsg = []
    if unitdefs:
        _uregcustom = []
        for u in unitdefs.splitlines():
            if u:  # Ignore blank lines
                try:
                    ureg.define(u)
                    _uregcustom.append(u)
                except (ValueError, TypeError, pint.errors.PintError):
                    logging.warning('Could not register unit definition "%s"', u)
                    errmsg.append(u)
    errmsg = '\n\t'.join(errmsg)
    if errmsg:
        errmsg = 'Error parsing units:\n' + errmsg
    return errmsg


def get_customunits():
    ''' Get string of custom unit definitions '''
    return '\n'.join(_uregcustom)


def is_dimensionless(u):
    ''' Check if unit is dimensionless '''
    return u == ureg.dimensionless


def has_units(u):
    ''' Determine if the value has units '''
    return hasattr(u, 'units') and hasattr(u, 'magnitude')


def strip_units(u):
    ''' Remove units if they exist '''
    if has_units(u):
        u = u.magnitude
    return u


def split_units(u):
    ''' Split magnitude and units

        Returns:
            magnitude (float): The magnitude of the value
            units (Pint or None): Units of the value
    '''
    units = None
    if has_units(u):
        units = u.units
        u = u.magnitude
    return u, units


def get_units(u):
    ''' Get units of quantity '''
    if has_units(u):
        return u.units
    return None


def make_quantity(value, unit):
    ''' Make a Pint Quantity with the value and (possibly None) unit or unit string '''
    if unit is None or str(unit).lower() in ('none', ''):
        return value

    if has_units(value):
        return convert(value, unit)

    if isinstance(unit, str):
        return value * parse_units(unit)
    return value * unit


def convert(value, units):
    ''' Convert value to units, if units are defined '''
    if units is None:
        return value

    if has_units(value):
        return value.to(units)

    return make_quantity(value, units)


def match_units(value1, value2):
    ''' Return value1 converted to same units as value2. A unitless value1
        takes on the units of value2.
    '''
    if not has_units(value2):
        return value1
    return convert(value1, value2.units)
