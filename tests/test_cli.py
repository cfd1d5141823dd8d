import contextlib
import io
import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from polarity_eval import cli
from tests.helpers import KeywordScorer, write_csv, write_text

SCORES = {"loved it": 0.9, "hated it": -0.9, "meh": 0.0}


def run_cli(argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = cli.main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        patcher = patch("polarity_eval.evaluate.get_sentiment_scorer", autospec=True)
        self.mock_factory = patcher.start()
        self.mock_factory.side_effect = lambda name: KeywordScorer(SCORES)
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_no_filename_prints_usage(self):
        code, out, _ = run_cli([])
        self.assertEqual(code, 0)
        self.assertIn("--filename", out)
        self.assertIn("--filters", out)
        self.mock_factory.assert_not_called()

    def test_metrics_output(self):
        path = write_csv([["1", "LOVED IT."], ["0", "hated it"], ["1", "meh"]], self.tmpdir)
        code, out, _ = run_cli(["--filename", path, "--filters", "lowercase,replace"])
        self.assertEqual(code, 0)
        self.assertEqual(
            out.splitlines(),
            [
                "Accuracy: 0.667",
                "Precision 1: 1.000",
                "Precision 0: 0.500",
                "Sensitivity 1: 0.500",
                "Sensitivity 0: 1.000",
                "F1 - 1: 0.667",
                "F1 - 0: 0.667",
            ],
        )

    def test_without_filters(self):
        path = write_csv([["1", "LOVED IT."]], self.tmpdir)
        code, out, _ = run_cli(["--filename", path])
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[0], "Accuracy: 0.000")

    def test_missing_file(self):
        code, out, err = run_cli(["--filename", os.path.join(self.tmpdir, "missing.csv")])
        self.assertEqual(code, cli.EXIT_IO_ERROR)
        self.assertEqual(out, "")
        self.assertIn("missing.csv", err)

    def test_malformed_row(self):
        path = write_text('1,loved it\n0,"bad"quote\n', self.tmpdir)
        code, out, _ = run_cli(["--filename", path])
        self.assertEqual(code, cli.EXIT_PARSE_ERROR)
        self.assertEqual(out, "")

    def test_label_out_of_range(self):
        path = write_csv([["2", "loved it"]], self.tmpdir)
        code, out, _ = run_cli(["--filename", path])
        self.assertEqual(code, cli.EXIT_PARSE_ERROR)
        self.assertEqual(out, "")

    def test_strict_labels_flag(self):
        path = write_csv([["x", "loved it"]], self.tmpdir)
        self.assertEqual(run_cli(["--filename", path])[0], 0)
        self.assertEqual(run_cli(["--filename", path, "--strict-labels"])[0], cli.EXIT_PARSE_ERROR)

    def test_flags_override_preset(self):
        args = cli.build_parser().parse_args(
            ["--filename", "x.csv", "--preset", "clean", "--filters", "replace", "--replace-all", "--workers", "2"]
        )
        config = cli.resolve_config(args)
        self.assertEqual(config.sanitizer.filters, ["replace"])
        self.assertTrue(config.sanitizer.replace_all)
        self.assertEqual(config.max_workers, 2)

    def test_preset_filters_kept_without_flag(self):
        args = cli.build_parser().parse_args(["--filename", "x.csv", "--preset", "clean"])
        self.assertEqual(cli.resolve_config(args).sanitizer.filters, ["lowercase", "normalize", "replace"])

    def test_invalid_thresholds(self):
        path = write_csv([["1", "loved it"]], self.tmpdir)
        code, _, err = run_cli(["--filename", path, "--pos-thresh", "-0.5", "--neg-thresh", "0.5"])
        self.assertEqual(code, cli.EXIT_PARSE_ERROR)
        self.assertIn("Invalid configuration", err)

    def test_unreadable_config(self):
        path = write_csv([["1", "loved it"]], self.tmpdir)
        code, out, err = run_cli(["--filename", path, "--config", self.tmpdir])
        self.assertEqual(code, cli.EXIT_IO_ERROR)
        self.assertEqual(out, "")
        self.assertIn("Could not read config", err)
        self.mock_factory.assert_not_called()

    def test_bare_quote_row(self):
        path = write_text('1,loved it\n0,she said "meh"\n', self.tmpdir)
        code, out, err = run_cli(["--filename", path])
        self.assertEqual(code, cli.EXIT_PARSE_ERROR)
        self.assertEqual(out, "")
        self.assertIn("line 2", err)

    def test_output_dir(self):
        path = write_csv([["1", "loved it"], ["0", "hated it"]], self.tmpdir)
        out_dir = os.path.join(self.tmpdir, "report")
        with patch("polarity_eval.cli.plot_confusion_matrix", autospec=True) as mock_plot:
            code, _, _ = run_cli(["--filename", path, "--output-dir", out_dir])
        self.assertEqual(code, 0)
        mock_plot.assert_called_once()
        with open(os.path.join(out_dir, "metrics.json"), encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["metrics"]["Accuracy"], 1.0)
        self.assertEqual(data["records"], 2)


if __name__ == "__main__":
    unittest.main()
