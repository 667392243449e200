import logging
import sys


class Logger():

    def __init__(self, name="rrt_planning", handlers=None, level='info'):
        self.level = level
        self.handlers = list(handlers) if handlers is not None else ['stdout']
        for handler in self.handlers:
            if handler not in ['stdout', 'logging']:
                raise ValueError("Handlers must be one of 'stdout' or 'logging'")
        if 'logging' in self.handlers:
            levels = {
                "info": logging.INFO,
                "debug": logging.DEBUG,
                "warn": logging.WARN,
                "err": logging.ERROR,
                "crit": logging.CRITICAL
            }
            if self.level not in levels:
                raise ValueError("Level must be one of {}".format(list(levels.keys())))

            self.logger = logging.getLogger(name)
            # Repeated Logger instances share the named logger; only attach one stream handler.
            if not self.logger.handlers:
                formatter = logging.Formatter('[%(asctime)s - %(name)s - %(levelname)s] - %(message)s')
                handler = logging.StreamHandler(stream=sys.stdout)
                handler.setFormatter(formatter)
                self.logger.addHandler(handler)
            self.logger.setLevel(levels[self.level])

    def debug(self, msg):
        if 'stdout' in self.handlers and self.level == 'debug':
            print(msg)
        if 'logging' in self.handlers:
            self.logger.debug(msg)

    def info(self, msg):
        if 'stdout' in self.handlers and self.level in ['debug', 'info']:
            print(msg)
        if 'logging' in self.handlers:
            self.logger.info(msg)

    def warn(self, msg):
        if 'stdout' in self.handlers:
            print(msg)
        if 'logging' in self.handlers:
            self.logger.warning(msg)

    def err(self, msg):
        if 'stdout' in self.handlers:
            print(msg)
        if 'logging' in self.handlers:
            self.logger.error(msg)

    def crit(self, msg):
        if 'stdout' in self.handlers:
            print(msg)
        if 'logging' in self.handlers:
            self.logger.critical(msg)
