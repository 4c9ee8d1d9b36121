from __future__ import annotations

import unittest

from yeipee.core.models import ClientStatus
from yeipee.runtime.status import add_status_to_href, detect_status, is_true


class TruthTests(unittest.TestCase):
    def test_true_words(self) -> None:
        for word in ('yes', 'TRUE', ' on ', '1'):
            self.assertTrue(is_true(word), word)
        for word in ('no', '', None, '2', 'enabled'):
            self.assertFalse(is_true(word), word)


class DetectStatusTests(unittest.TestCase):
    def test_server_processing_disallowed(self) -> None:
        self.assertIs(ClientStatus.DISABLED_ON_CLIENT, detect_status('1', may_process_on_server=False))

    def test_nothing_requested(self) -> None:
        status = detect_status()
        self.assertIs(ClientStatus.PROCESS_AND_SEND_OFF, status)
        self.assertTrue(status.must_process_on_server)

    def test_parameter_wins_over_cookie(self) -> None:
        self.assertIs(ClientStatus.PROCESS_AND_SEND_ON, detect_status('yes', '0'))
        self.assertIs(ClientStatus.DEFER_AND_SEND_OFF, detect_status('0', '1'))

    def test_cookie_used_without_parameter(self) -> None:
        self.assertIs(ClientStatus.PROCESS_AND_SEND_ON, detect_status('', 'on'))
        status = detect_status(None, 'off')
        self.assertIs(ClientStatus.DEFER_AND_SEND_OFF, status)
        self.assertFalse(status.must_process_on_server)


class HrefTests(unittest.TestCase):
    def test_appends_parameter(self) -> None:
        self.assertEqual('/a?yst.yeipee=1', add_status_to_href('/a', ClientStatus.PROCESS_AND_SEND_ON))
        self.assertEqual('/a?b=2&yst.yeipee=0', add_status_to_href('/a?b=2', ClientStatus.DEFER_AND_SEND_OFF))

    def test_existing_parameter_is_kept(self) -> None:
        href = '/a?yst.yeipee=0'
        self.assertEqual(href, add_status_to_href(href, ClientStatus.PROCESS_AND_SEND_ON))

    def test_disabled_leaves_href(self) -> None:
        self.assertEqual('/a', add_status_to_href('/a', ClientStatus.DISABLED_ON_CLIENT))


if __name__ == '__main__':
    unittest.main()
