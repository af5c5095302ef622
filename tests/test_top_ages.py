import contextlib
import io
import json
import shutil
import tempfile
import unittest

from agecensus.tools.top_ages import main


class TestTopAgesTool(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir)
        for region, ages in {"a": [0, 0, 0, 1, 1, 2, -1], "b": [2, 2, 2]}.items():
            with open(f"{self.tmp_dir}/{region}.txt", "wt") as f:
                f.write("\n".join(map(str, ages)))

    def run_tool(self, *args):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main([self.tmp_dir, *args])
        return code, out.getvalue().split()

    def test_all_regions(self):
        code, lines = self.run_tool("--parallelism", "2")
        self.assertEqual(code, 0)
        self.assertEqual(lines, ["1:2=4", "2:0=3", "3:1=2"])

    def test_selected_regions_and_tiers(self):
        code, lines = self.run_tool("a", "--top-tiers", "1")
        self.assertEqual(code, 0)
        self.assertEqual(lines, ["1:0=3"])

    def test_saves_stats(self):
        stats_path = f"{self.tmp_dir}/stats.json"
        code, _ = self.run_tool("a", "b", "missing", "--stats", stats_path)
        self.assertEqual(code, 0)
        with open(stats_path) as f:
            stats = json.load(f)
        self.assertEqual(stats["regions"], 3)
        self.assertEqual(stats["unresolved"], 1)
        self.assertEqual(stats["invalid"], 1)

    def test_no_regions(self):
        empty_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, empty_dir)
        self.assertEqual(main([empty_dir]), 1)
