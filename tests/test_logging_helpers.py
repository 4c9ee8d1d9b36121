from __future__ import annotations

import io
import json
import logging
import os
import unittest
from unittest.mock import patch

from yeipee.logging.helpers import (
    JsonLogFormatter,
    configure_logging,
    fragment_trace_enabled,
    get_logger,
    trace_fragment,
)


class LoggingHelpersTests(unittest.TestCase):
    def test_names_are_namespaced(self) -> None:
        self.assertEqual('yeipee', get_logger().name)
        self.assertEqual('yeipee.render', get_logger('render').name)
        self.assertEqual('yeipee.render', get_logger('yeipee.render').name)

    def test_json_lines_carry_template_fields(self) -> None:
        record = logging.LogRecord('yeipee.render', logging.WARNING, __file__, 1, 'hello %s', ('x',), None)
        record.template = 'home'
        record.fragment = 3
        payload = json.loads(JsonLogFormatter(package_version='9.9').format(record))
        self.assertEqual('WARNING', payload['level'])
        self.assertEqual('yeipee.render', payload['logger'])
        self.assertEqual('hello x', payload['msg'])
        self.assertEqual('9.9', payload['version'])
        self.assertEqual('home', payload['template'])
        self.assertEqual(3, payload['fragment'])
        self.assertNotIn('kind', payload)
        self.assertTrue(payload['ts'].endswith('Z'))

    def test_configure_logging_replaces_handlers(self) -> None:
        base = logging.getLogger('yeipee')
        saved = list(base.handlers)
        self.addCleanup(lambda: (base.handlers.clear(), base.handlers.extend(saved)))

        first, second = io.StringIO(), io.StringIO()
        configure_logging(stream=first)
        configure_logging(json_logs=True, stream=second)
        self.assertEqual(1, len(base.handlers))

        get_logger('render').warning('boom', extra={'template': 'home'})
        self.assertEqual('', first.getvalue())
        payload = json.loads(second.getvalue())
        self.assertEqual('boom', payload['msg'])
        self.assertEqual('home', payload['template'])

    def test_fragment_trace_is_gated(self) -> None:
        stream = io.StringIO()
        lg = logging.getLogger('yeipee.test.trace')
        lg.setLevel(logging.DEBUG)
        lg.propagate = False
        handler = logging.StreamHandler(stream)
        lg.addHandler(handler)
        self.addCleanup(lg.removeHandler, handler)

        with patch.dict(os.environ, {'YEIPEE_TRACE_FRAGMENTS': '0'}):
            self.assertFalse(fragment_trace_enabled())
            trace_fragment(lg, 'hidden', template='t', index=0)
        with patch.dict(os.environ, {'YEIPEE_TRACE_FRAGMENTS': '1'}):
            trace_fragment(lg, 'shown', template='t', index=1, offset=12)

        self.assertNotIn('hidden', stream.getvalue())
        self.assertIn('shown [t#1]', stream.getvalue())
        self.assertIn("'offset': 12", stream.getvalue())


if __name__ == '__main__':
    unittest.main()
