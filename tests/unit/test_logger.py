from unittest import TestCase
import logging

from dropspace import logger


class TestLogger(TestCase):
    def tearDown(self):
        logger.overwrite_logger_level(logging.WARNING)

    def test_handlers_added_once(self):
        a = logger.get_logger('TestLoggerOnce')
        b = logger.get_logger('TestLoggerOnce')

        handlers = list(a.handlers)

        self.assertIs(a, b)
        self.assertEqual(logger.get_logger('TestLoggerOnce').handlers, handlers)
        self.assertFalse(a.propagate)

    def test_colored_formatter(self):
        log = logger.get_logger('TestLoggerFormat')

        self.assertIsInstance(log.handlers[0], logger.ColoredStreamHandler)

    def test_overwrite_level(self):
        log = logger.get_logger('TestLoggerLevel')
        logger.overwrite_logger_level(logging.DEBUG)

        self.assertEqual(log.level, logging.DEBUG)

    def test_negative_level_mocks(self):
        logger.overwrite_logger_level(-1)

        log = logger.get_logger('TestLoggerMock')

        self.assertIsInstance(log, logger.MockLogger)
        log.info('nothing happens')
