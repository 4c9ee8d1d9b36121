from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from yeipee.cli import main

TEMPLATE = (
    '<p>Hi</p><script yst="model"></script>'
    "<script>document.write(YST.Txt.value([], 0, null, null, ['$who$']));</script>"
)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.template = self.dir / 'page.html'
        self.template.write_text(TEMPLATE, encoding='utf-8')
        self.model = self.dir / 'model.js'
        self.model.write_text("var who = 'Ann';", encoding='utf-8')
        env = patch.dict('os.environ')
        env.start()
        self.addCleanup(env.stop)
        for key in [k for k in os.environ if k.startswith('YEIPEE_')]:
            del os.environ[key]

    def run_cli(self, *argv: str):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_classify_lists_fragments(self) -> None:
        code, out = self.run_cli('classify', str(self.template))
        self.assertEqual(0, code)
        lines = out.splitlines()
        self.assertEqual(3, len(lines))
        self.assertIn('plain', lines[0])
        self.assertIn('model', lines[1])
        self.assertIn('yeast', lines[2])

    def test_render(self) -> None:
        code, out = self.run_cli('render', str(self.template), '--model', str(self.model))
        self.assertEqual(0, code)
        self.assertEqual('<p>Hi</p><script yst="model">var who = \'Ann\';</script>Ann\n', out)

    def test_render_deferred(self) -> None:
        code, out = self.run_cli('render', str(self.template), '--model', str(self.model), '--defer')
        self.assertEqual(0, code)
        self.assertIn("document.write(YST.Txt.value", out)
        self.assertIn('<script yst="model">var who = \'Ann\';</script>', out)

    def test_server_processing_disabled_by_environment(self) -> None:
        with patch.dict('os.environ', {'YEIPEE_MAY_PROCESS_ON_SERVER': 'no'}):
            code, out = self.run_cli('render', str(self.template), '--model', str(self.model))
        self.assertEqual(0, code)
        self.assertIn("document.write(YST.Txt.value", out)
        self.assertIn('YST.Acsbl.enable = false;', out)
        self.assertIn("var who = 'Ann';\nif (YST.Acsbl) {", out)

    def test_malformed_template_exits_with_error(self) -> None:
        self.template.write_text('<script yst="declare">var a;', encoding='utf-8')
        code, out = self.run_cli('render', str(self.template))
        self.assertEqual(1, code)
        self.assertEqual('', out)

    def test_missing_file_exits_with_error(self) -> None:
        code, _ = self.run_cli('classify', str(self.dir / 'nope.html'))
        self.assertEqual(1, code)

    def test_invalid_timeout_environment(self) -> None:
        with patch.dict('os.environ', {'YEIPEE_EVAL_TIMEOUT': 'x'}):
            code, _ = self.run_cli('classify', str(self.template))
        self.assertEqual(1, code)


if __name__ == '__main__':
    unittest.main()
