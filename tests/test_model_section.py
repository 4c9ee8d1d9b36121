from __future__ import annotations

import unittest

from yeipee.core.models import ClientStatus
from yeipee.rendering.model_section import ModelSection


class ModelSectionTests(unittest.TestCase):
    def test_script_data_envelope(self) -> None:
        section = ModelSection().append_line('var a = 1;')
        self.assertEqual(
            '<script type="text/javascript">\n//<![CDATA[\nvar a = 1;\n//]]>\n</script>',
            section.script_data,
        )
        self.assertEqual(section.script_data, str(section))

    def test_append_ignores_none(self) -> None:
        section = ModelSection('a').append(None).append('b')
        self.assertEqual('ab', section.data)

    def test_extend_separates_non_empty_parts(self) -> None:
        self.assertEqual('a\nb', ModelSection('a').extend(ModelSection('b')).data)
        self.assertEqual('b', ModelSection().extend(ModelSection('b')).data)
        self.assertEqual('a', ModelSection('a').extend(ModelSection()).data)

    def test_is_empty(self) -> None:
        self.assertTrue(ModelSection().is_empty)
        self.assertFalse(ModelSection('x').is_empty)

    def test_with_status_disabled(self) -> None:
        base = ModelSection('var m;\n')
        section = base.with_status(ClientStatus.DISABLED_ON_CLIENT)
        self.assertEqual('var m;\nif (YST.Acsbl) {\nYST.Acsbl.enable = false;\n}\n', section.data)
        self.assertEqual('var m;\n', base.data)

    def test_with_status_process_and_send(self) -> None:
        section = ModelSection().with_status(ClientStatus.PROCESS_AND_SEND_ON)
        self.assertIn('YST.Acsbl.yeipeeParam.value = 1;', section.data)

    def test_with_status_starts_on_its_own_line(self) -> None:
        section = ModelSection('var m = 1;').with_status(ClientStatus.DISABLED_ON_CLIENT)
        self.assertTrue(section.data.startswith('var m = 1;\nif (YST.Acsbl) {\n'))

    def test_with_status_silent(self) -> None:
        for status in (ClientStatus.PROCESS_AND_SEND_OFF, ClientStatus.DEFER_AND_SEND_OFF):
            self.assertEqual('var m;', ModelSection('var m;').with_status(status).data)


if __name__ == '__main__':
    unittest.main()
