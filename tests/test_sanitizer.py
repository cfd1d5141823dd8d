import unittest

from polarity_eval.config import SanitizerConfig
from polarity_eval.sanitizer import (
    Sanitizer,
    lowercase,
    normalize,
    parse_filters,
    replace,
    replace_all,
    sanitize,
)


class TestFilters(unittest.TestCase):
    def test_lowercase(self):
        self.assertEqual(lowercase("HELLO World"), "hello world")

    def test_normalize_strips_accents(self):
        self.assertEqual(normalize("café"), "cafe")
        self.assertEqual(normalize("Ångström naïve façade"), "Angstrom naive facade")

    def test_normalize_letters_without_decomposition(self):
        self.assertEqual(normalize("Łódź"), "Lodz")
        self.assertEqual(normalize("straße"), "strasse")
        self.assertEqual(normalize("Søren"), "Soren")

    def test_normalize_leaves_plain_text(self):
        self.assertEqual(normalize("plain text, 123!"), "plain text, 123!")

    def test_replace_only_first_occurrence(self):
        self.assertEqual(replace("a.b.c"), "a b.c")

    def test_replace_each_mark_once(self):
        self.assertEqual(replace('say "hi", ok: yes; no.'), 'say  hi"  ok  yes  no ')

    def test_replace_ellipsis_after_period(self):
        # the first "." of the ellipsis is consumed before "..." is looked up
        self.assertEqual(replace("Wait... what"), "Wait .. what")

    def test_replace_all(self):
        self.assertEqual(replace_all('say "hi", ok: yes; no.'), "say  hi   ok  yes  no ")
        self.assertEqual(replace_all("a.b.c"), "a b c")


class TestSanitize(unittest.TestCase):
    def test_empty_filters_is_identity(self):
        text = "  Some TEXT, with café.  "
        self.assertEqual(sanitize(text, []), text)
        self.assertEqual(Sanitizer()(text), text)

    def test_filters_applied_in_order(self):
        self.assertEqual(sanitize("CAFÉ. Bar.", ["lowercase", "normalize", "replace"]), "cafe  bar.")

    def test_unknown_filter_ignored(self):
        self.assertEqual(sanitize("A.B", ["shout", "replace"]), "A B")

    def test_replace_every_flag(self):
        self.assertEqual(sanitize("a.b.c", ["replace"], replace_every=True), "a b c")
        self.assertEqual(sanitize("a.b.c", ["lowercase"], replace_every=True), "a.b.c")

    def test_sanitizer_uses_config(self):
        sanitizer = Sanitizer(SanitizerConfig(filters=["replace"], replace_all=True))
        self.assertEqual(sanitizer("x.y.z"), "x y z")
        self.assertEqual(sanitizer.filters, ["replace"])

    def test_sanitizer_does_not_trim(self):
        self.assertEqual(sanitize(" a. ", ["replace"]), " a  ")


class TestParseFilters(unittest.TestCase):
    def test_split(self):
        self.assertEqual(parse_filters("lowercase,replace,normalize"), ["lowercase", "replace", "normalize"])

    def test_empty(self):
        self.assertEqual(parse_filters(""), [])
        self.assertEqual(parse_filters(None), [])


if __name__ == "__main__":
    unittest.main()
