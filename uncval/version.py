''' Version information '''
__version__ = '0.1.0'
__date__ = '18-Oct-2026'
