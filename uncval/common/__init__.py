''' Shared helpers: units registry, number formatting, config files '''
