'''
Uncval - Uncertain values and real intervals

Value types for numerical code: UncertainValue pairs a result with its
absolute error and propagates the error through arithmetic; Interval is
a range on the real line that may have infinite endpoints.
'''

from .version import __version__, __date__

from .common import unitmgr, report
from .common.unitmgr import ureg
from .uncertain import UncertainValue, uncertain
from .interval import Interval, interval
from .common.configfile import save_config, load_config

__all__ = ['__version__', '__date__', 'unitmgr', 'report', 'ureg', 'UncertainValue', 'uncertain',
           'Interval', 'interval', 'save_config', 'load_config']
