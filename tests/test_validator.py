import unittest
from concurrent.futures import ThreadPoolExecutor

from pypandigital import Config, ConfigError, Validator


class TestValidator(unittest.TestCase):

    def test_base_ten_defaults(self):
        """Test the default rule set: base 10, zero required, repeats allowed."""
        validator = Validator()
        self.assertTrue(validator.is_pandigital("1234567890"))
        self.assertTrue(validator.is_pandigital("0987654321"))
        self.assertTrue(validator.is_pandigital("11234567890"))
        self.assertFalse(validator.is_pandigital("123456"))
        self.assertFalse(validator.is_pandigital("1234567899"))

    def test_zeroless(self):
        """Test that zero is forbidden when it is not required."""
        validator = Validator(require_zero=False)
        self.assertFalse(validator.is_pandigital("1234567890"))
        self.assertTrue(validator.is_pandigital("123456789"))
        self.assertTrue(validator.is_pandigital("1234567899"))

    def test_unique_digits(self):
        """Test that unique mode forbids repeats and extra length."""
        validator = Validator(unique=True, base=4)
        self.assertTrue(validator.is_pandigital("1230"))
        self.assertFalse(validator.is_pandigital("12330"))
        self.assertFalse(validator.is_pandigital("1233"))
        self.assertFalse(validator.is_pandigital("123"))

    def test_unique_zeroless_octal(self):
        validator = Validator(base=8, require_zero=False, unique=True)
        self.assertFalse(validator.is_pandigital("012345567"))
        self.assertTrue(validator.is_pandigital("1234567"))
        self.assertTrue(validator.is_pandigital("7654321"))

    def test_hex(self):
        """Test hex digits, including case-insensitivity."""
        validator = Validator(base=16)
        self.assertTrue(validator.is_pandigital("1234567890ABCDEF"))
        self.assertTrue(validator.is_pandigital("1234567890abcdef"))
        self.assertTrue(validator.is_pandigital("1234567890aBcDeF"))
        self.assertFalse(validator.is_pandigital("1234567890ABCDEE"))
        self.assertFalse(validator.is_pandigital("1234567890ABCDEG"))

    def test_hex_keeps_zero_in_alphabet_when_zeroless(self):
        """Test that base 16 keeps zero in its alphabet even when zero is not required."""
        validator = Validator(base=16, require_zero=False)
        self.assertEqual(validator.min_length, 15)
        self.assertEqual(len(validator.alphabet), 16)
        self.assertTrue(validator.is_pandigital("123456789ABCDEF"))
        # Sixteen distinct digits is one more than the fifteen counted for.
        self.assertFalse(validator.is_pandigital("0123456789ABCDEF"))

    def test_base_one(self):
        validator = Validator(base=1)
        self.assertTrue(validator.is_pandigital("0"))
        self.assertTrue(validator.is_pandigital("000"))
        self.assertFalse(validator.is_pandigital(""))
        self.assertFalse(validator.is_pandigital("1"))
        self.assertFalse(Validator(base=1, unique=True).is_pandigital("00"))

    def test_base_one_zeroless_accepts_only_empty_string(self):
        validator = Validator(base=1, require_zero=False)
        self.assertEqual(validator.alphabet, ())
        self.assertTrue(validator.is_pandigital(""))
        self.assertFalse(validator.is_pandigital("0"))
        self.assertFalse(validator.is_pandigital("1"))

    def test_binary(self):
        validator = Validator(base=2)
        self.assertTrue(validator.is_pandigital("01"))
        self.assertTrue(validator.is_pandigital("101"))
        self.assertFalse(validator.is_pandigital("111"))
        unique = Validator(base=2, unique=True)
        self.assertTrue(unique.is_pandigital("10"))
        self.assertFalse(unique.is_pandigital("101"))

    def test_invalid_bases(self):
        """Test that unsupported bases raise ConfigError at construction."""
        for base in (0, -1, 11, 12, 15, 17, 100):
            with self.subTest(base=base):
                with self.assertRaises(ConfigError):
                    Validator(base=base)

    def test_valid_bases(self):
        for base in list(range(1, 11)) + [16]:
            with self.subTest(base=base):
                self.assertEqual(Validator(base=base).config.base, base)

    def test_never_raises_on_odd_input(self):
        """Test that any input yields a boolean rather than an exception."""
        validator = Validator()
        for value in ("", " ", "12345 67890", "１２３４５６７８９０", "1234567890\n", None, 1234567890, 12.5, b"1234567890"):
            with self.subTest(value=value):
                self.assertFalse(validator.is_pandigital(value))

    def test_unique_requires_exact_length(self):
        validator = Validator(base=5, unique=True)
        for value in ("01234", "43210", "012344", "0123", "001234"):
            with self.subTest(value=value):
                result = validator.is_pandigital(value)
                if result:
                    self.assertEqual(len(value), validator.min_length)
        self.assertTrue(validator.is_pandigital("43210"))

    def test_is_deterministic(self):
        validator = Validator(base=6)
        values = ["012345", "0123455", "01234", "543210", "abcdef"]
        first = [validator.is_pandigital(v) for v in values]
        second = [validator.is_pandigital(v) for v in values]
        self.assertEqual(first, second)
        self.assertEqual(validator.config, Config(base=6))

    def test_concurrent_use(self):
        """Test that a fresh validator gives the same answers from many threads."""
        values = [str(n).zfill(4) for n in range(10000)]
        expected = [Validator(base=4).is_pandigital(v) for v in values]

        validator = Validator(base=4)
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(validator.is_pandigital, values))
        self.assertEqual(results, expected)
        self.assertEqual(sum(results), 24)

    def test_scan(self):
        validator = Validator(base=3)
        values = ["012", "11", "210", "2100", "abc", "0012"]
        self.assertEqual(list(validator.scan(values)), ["012", "210", "2100", "0012"])

    def test_from_config(self):
        config = Config(base=9, unique=True, require_zero=False)
        validator = Validator.from_config(config)
        self.assertEqual(validator.config, config)
        self.assertEqual(validator.min_length, 8)
        self.assertEqual(repr(validator), "Validator(base=9, unique=True, require_zero=False)")


class TestExplain(unittest.TestCase):

    def setUp(self):
        self.validator = Validator()

    def test_pandigital_report(self):
        report = self.validator.explain("1234567890")
        self.assertTrue(report["pandigital"])
        self.assertIsNone(report["failed_stage"])
        self.assertIsNone(report["reason"])
        self.assertEqual([s["name"] for s in report["stages"]], ["Length", "Charset", "Coverage"])
        self.assertTrue(all(s["passed"] for s in report["stages"]))

    def test_length_rejection_stops_pipeline(self):
        report = self.validator.explain("123456")
        self.assertFalse(report["pandigital"])
        self.assertEqual(report["failed_stage"], "Length")
        self.assertIn("too short", report["reason"])
        self.assertEqual(len(report["stages"]), 1)

    def test_charset_rejection(self):
        report = self.validator.explain("12345678x0")
        self.assertEqual(report["failed_stage"], "Charset")
        self.assertIn("'X'", report["reason"])
        self.assertEqual(len(report["stages"]), 2)

    def test_coverage_rejection(self):
        report = self.validator.explain("1234567899")
        self.assertEqual(report["failed_stage"], "Coverage")
        self.assertEqual(report["reason"], "missing digits: 0")

    def test_repeated_digit_rejection(self):
        report = Validator(base=4, unique=True).explain("1123")
        self.assertEqual(report["failed_stage"], "Coverage")
        self.assertEqual(report["reason"], "repeated digit '1'")

    def test_non_string_input(self):
        report = self.validator.explain(1234567890)
        self.assertFalse(report["pandigital"])
        self.assertEqual(report["failed_stage"], "Input")
        self.assertEqual(report["stages"], [])

    def test_explain_agrees_with_is_pandigital(self):
        validator = Validator(base=3, unique=True)
        for value in ("012", "0121", "01", "abc", "201", "0011"):
            with self.subTest(value=value):
                self.assertEqual(validator.explain(value)["pandigital"], validator.is_pandigital(value))


if __name__ == '__main__':
    unittest.main()
