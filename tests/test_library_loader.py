from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from yeipee.errors import LibraryNotFoundError
from yeipee.io.library_loader import LibraryLoader


class LibraryLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def test_packaged_libraries(self) -> None:
        loader = LibraryLoader()
        self.assertIn('var window = this;', loader.load('sharedEnv'))
        self.assertIn('YST.Txt = {', loader.load('ystEngine'))

    def test_packaged_copy_wins_over_filesystem(self) -> None:
        (self.dir / 'shared_env.js').write_text('var local = 1;', encoding='utf-8')
        self.assertNotIn('var local', LibraryLoader(self.dir).load('sharedEnv'))

    def test_filesystem_fallback(self) -> None:
        (self.dir / 'extra.js').write_text('var extra = 1;', encoding='utf-8')
        loader = LibraryLoader(self.dir, files={'extra': 'extra.js'})
        self.assertEqual('var extra = 1;', loader.load('extra'))

    def test_results_are_cached(self) -> None:
        path = self.dir / 'extra.js'
        path.write_text('var extra = 1;', encoding='utf-8')
        loader = LibraryLoader(self.dir, files={'extra': 'extra.js'})
        loader.load('extra')
        path.unlink()
        self.assertEqual('var extra = 1;', loader.load('extra'))

    def test_missing_library(self) -> None:
        loader = LibraryLoader(self.dir, files={'extra': 'extra.js'})
        with self.assertRaises(LibraryNotFoundError) as ctx:
            loader.load('extra')
        self.assertIsInstance(ctx.exception, FileNotFoundError)
        self.assertIn('extra.js', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
