''' Save and load lists of uncertain values and intervals as YAML config files '''

import logging
import yaml

from ..uncertain import UncertainValue
from ..interval import Interval


MODES = {
    'uncertain': UncertainValue,
    'interval': Interval,
}


def get_config(items):
    ''' Get list of configuration dictionaries for the items '''
    return [item.config() for item in items]


def from_config(config):
    ''' Build items from a list of configuration dictionaries. Entries with
        an unknown mode are skipped.
    '''
    items = []
    for configdict in config:
        if not hasattr(configdict, 'get'):
            raise ValueError(f'Invalid configuration entry: {configdict}')

        mode = configdict.get('mode', 'uncertain')
        try:
            cls = MODES[mode]
        except KeyError:
            logging.warning('Skipping config entry with unknown mode %s', mode)
            continue
        items.append(cls.from_config(configdict))
    return items


def save_config(items, fname):
    ''' Save items to a YAML config file.

        Args:
            items (list): UncertainValue and Interval instances
            fname (str or file): File name or open file object to write to
    '''
    out = yaml.dump(get_config(items), default_flow_style=False, allow_unicode=True)
    try:
        fname.write(out)
    except AttributeError:  # fname is string name of file
        with open(fname, 'w', encoding='utf-8') as f:
            f.write(out)


def load_config(fname):
    ''' Load items from a YAML config file.

        Args:
            fname (str or file): File name or open file object to read from

        Returns:
            List of UncertainValue and Interval instances, or None if the
            file can't be read as YAML.
    '''
    try:
        try:
            yml = fname.read()  # fname is file object
        except AttributeError:
            with open(fname, 'r', encoding='utf-8') as fobj:  # fname is string
                yml = fobj.read()
    except UnicodeDecodeError:
        # file is binary, can't be read as yaml
        return None

    try:
        config = yaml.safe_load(yml)
    except yaml.YAMLError:
        return None  # Can't read YAML

    if config is None:
        return []
    if not isinstance(config, list):
        config = [config]  # Single item saved as a dict
    return from_config(config)
