# tests/test_escape_codes.py
import unittest

from engine.ui.escape_codes import (
    convert_escape_characters, obtain_escape_code, obtain_escape_param, strip_escape_codes
)


class TestEscapeCodes(unittest.TestCase):

    def test_backslash_codes_become_escape_sequences(self):
        self.assertEqual(convert_escape_characters("\\C[2]Hi"), "\x1bC[2]Hi")
        self.assertEqual(convert_escape_characters("a\\\\b"), "a\\b")

    def test_obtain_code_and_param(self):
        text = "\x1bI[64]sword"
        code, index = obtain_escape_code(text, 1)
        self.assertEqual((code, index), ("I", 2))
        param, index = obtain_escape_param(text, index)
        self.assertEqual((param, index), (64, 6))

    def test_symbol_codes_and_case(self):
        self.assertEqual(obtain_escape_code("\x1b.rest", 1), (".", 2))
        self.assertEqual(obtain_escape_code("\x1bc[1]", 1), ("C", 2))

    def test_missing_code_or_param(self):
        self.assertEqual(obtain_escape_code("\x1b[1]", 1), ("", 1))
        self.assertEqual(obtain_escape_param("abc", 0), (-1, 0))

    def test_strip_leaves_drawn_text(self):
        self.assertEqual(strip_escape_codes("\x1bC[2]Red\x1bC[0]!\x1b."), "Red!")
        self.assertEqual(strip_escape_codes("a\nb"), "ab")
