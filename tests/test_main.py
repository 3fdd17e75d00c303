"""Tests for the command-line front end."""
import sys
sys.path.insert(0, str(__import__('pathlib').Path(__file__).resolve().parents[1]))

import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest import mock

import main
from config_reader import historical_machine
from errors import ConfigurationError

CONFIG = str(Path(__file__).resolve().parents[1] / "configs" / "default.conf")


class TestFormatGroups(unittest.TestCase):
    def test_groups_of_five(self):
        self.assertEqual(main.format_groups("QVPQSOKOILPUBKJZPISFXDW"),
                         "QVPQS OKOIL PUBKJ ZPISF XDW")

    def test_other_sizes(self):
        self.assertEqual(main.format_groups("ABCDEFG", 3), "ABC DEF G")
        self.assertEqual(main.format_groups("", 5), "")


class TestProcess(unittest.TestCase):
    def run_lines(self, text):
        out = io.StringIO()
        main.process(historical_machine(), io.StringIO(text), out)
        return out.getvalue()

    def test_messages_and_blank_lines(self):
        text = ("* B-thin Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)\n"
                "FROM HIS SHOULDER HIAWATHA\n"
                "\n"
                "* B-thin Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)\n"
                "QVPQS OKOIL PUBKJ ZPISF XDW\n")
        self.assertEqual(self.run_lines(text),
                         "QVPQS OKOIL PUBKJ ZPISF XDW\n\nFROMH ISSHO ULDER HIAWA THA\n")

    def test_leading_blank_lines_skipped(self):
        self.assertEqual(self.run_lines("\n\n* B Beta III IV I AAAA\n"), "")

    def test_message_before_setup(self):
        with self.assertRaises(ConfigurationError):
            self.run_lines("HELLO\n")

    def test_no_input(self):
        with self.assertRaises(ConfigurationError):
            self.run_lines("")


class TestMain(unittest.TestCase):
    def test_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            src, dst = Path(tmp) / "in.txt", Path(tmp) / "out.txt"
            src.write_text("* B-thin Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)\n"
                           "FROM HIS SHOULDER HIAWATHA\n", encoding="utf-8")
            self.assertEqual(main.main([CONFIG, str(src), str(dst), "--block", "4"]), 0)
            self.assertEqual(dst.read_text(encoding="utf-8"),
                             "QVPQ SOKO ILPU BKJZ PISF XDW\n")

    def test_stdin_stdout(self):
        conf = str(Path(CONFIG).with_name("enigma_i.json"))
        stdin = io.StringIO("* B I II III AAA\nAAAAA\n")
        stdout = io.StringIO()
        with mock.patch.object(sys, "stdin", stdin), mock.patch.object(sys, "stdout", stdout):
            self.assertEqual(main.main([conf]), 0)
        self.assertEqual(stdout.getvalue(), "BDZGO\n")

    def test_errors_exit_one(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "in.txt"
            src.write_text("* B-thin Beta III IV I AXLE\nHELLO 42\n", encoding="utf-8")
            err = io.StringIO()
            with redirect_stderr(err):
                self.assertEqual(main.main([CONFIG, str(src), str(Path(tmp) / "out.txt")]), 1)
            self.assertTrue(err.getvalue().startswith("Error: "))

            err = io.StringIO()
            with redirect_stderr(err):
                self.assertEqual(main.main([str(Path(tmp) / "missing.conf")]), 1)
            self.assertIn("Error:", err.getvalue())

    def test_badly_shaped_json_exits_one(self):
        with tempfile.TemporaryDirectory() as tmp:
            conf, src = Path(tmp) / "bad.json", Path(tmp) / "in.txt"
            conf.write_text('{"alphabet": "ABCD", "slots": 2, "pawls": 1, "rotors": 5}',
                            encoding="utf-8")
            src.write_text("* R X A\nABCD\n", encoding="utf-8")
            err = io.StringIO()
            with redirect_stderr(err):
                self.assertEqual(main.main([str(conf), str(src), str(Path(tmp) / "out.txt")]), 1)
            self.assertTrue(err.getvalue().startswith("Error: "))

    def test_bad_block(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            main.parse_args([CONFIG, "--block", "0"])

    def test_config_from_args(self):
        args = main.parse_args(["historical", "--block", "3", "--debug", "stepping", "signal"])
        cfg = main.Config.from_args(args)
        self.assertEqual(cfg.block, 3)
        self.assertEqual(cfg.debug, ("stepping", "signal"))
        self.assertIsNone(cfg.log_file)


if __name__ == "__main__":
    unittest.main()
