from __future__ import annotations

import unittest
from unittest.mock import patch


class TestDecodeCodepoints(unittest.TestCase):
    def test_decodes_with_explicit_encoding(self) -> None:
        from globmatch.encoding import decode_codepoints

        self.assertEqual(decode_codepoints("Мир".encode("utf-8"), "utf-8"), [0x41C, 0x438, 0x440])
        self.assertEqual(decode_codepoints(b"\xcc", "cp1251"), [0x41C])

    def test_defaults_to_locale_encoding(self) -> None:
        from globmatch.encoding import decode_codepoints

        with patch("globmatch.encoding.locale.getpreferredencoding", return_value="cp1251"):
            self.assertEqual(decode_codepoints(b"\xcc"), [0x41C])

    def test_invalid_bytes_raise(self) -> None:
        from globmatch.encoding import decode_codepoints

        with self.assertRaises(UnicodeDecodeError):
            decode_codepoints(b"\xff", "utf-8")

    def test_raw_codepoints_is_byte_per_unit(self) -> None:
        from globmatch.encoding import raw_codepoints

        self.assertEqual(raw_codepoints(b"a\xff\x00"), [0x61, 0xFF, 0x00])


class TestMatchEncoded(unittest.TestCase):
    def test_multibyte_text(self) -> None:
        from globmatch import MatchResult, match_encoded

        got = match_encoded(
            "[Пп]ривет, [Мм]ир".encode("utf-8"),
            "Привет, Мир".encode("utf-8"),
            encoding="utf-8",
        )
        self.assertIs(got, MatchResult.MATCHED)

        got = match_encoded(b"main.?", b"main.c", encoding="utf-8")
        self.assertIs(got, MatchResult.MATCHED)

        got = match_encoded("?".encode("utf-8"), "Ж".encode("utf-8"), encoding="utf-8")
        self.assertIs(got, MatchResult.MATCHED)

    def test_undecodable_input_is_encoding_error(self) -> None:
        from globmatch import MatchResult, match_encoded

        self.assertIs(
            match_encoded(b"\xff*", b"a", encoding="utf-8"),
            MatchResult.ENCODING_ERROR,
        )
        self.assertIs(
            match_encoded(b"*", b"a\xc3", encoding="utf-8"),
            MatchResult.ENCODING_ERROR,
        )
        # Decoding happens before the pattern is looked at.
        self.assertIs(
            match_encoded(b"[", b"\xff", encoding="utf-8"),
            MatchResult.ENCODING_ERROR,
        )

    def test_syntax_error_after_decoding(self) -> None:
        from globmatch import MatchResult, match_encoded

        self.assertIs(
            match_encoded(b"[a-c", b"a", encoding="utf-8"), MatchResult.SYNTAX_ERROR
        )

    def test_separator(self) -> None:
        from globmatch import MatchResult, match_encoded

        self.assertIs(
            match_encoded(b"*", b"a/b", encoding="utf-8", separator="/"),
            MatchResult.UNMATCHED,
        )


class TestMatchRawBytes(unittest.TestCase):
    def test_ascii(self) -> None:
        from globmatch import MatchResult, match_raw_bytes

        self.assertIs(match_raw_bytes(b"*.c", b"main.c"), MatchResult.MATCHED)
        self.assertIs(match_raw_bytes(b"*.js", b"main.c"), MatchResult.UNMATCHED)
        self.assertIs(match_raw_bytes(b"[", b"["), MatchResult.SYNTAX_ERROR)

    def test_any_byte_value_is_accepted(self) -> None:
        from globmatch import MatchResult, match_raw_bytes

        self.assertIs(match_raw_bytes(b"\xff?", b"\xff\x00"), MatchResult.MATCHED)
        self.assertIs(match_raw_bytes(b"[\x80-\xff]", b"\xc3"), MatchResult.MATCHED)

    def test_multibyte_text_is_not_one_unit(self) -> None:
        from globmatch import MatchResult, match_raw_bytes

        self.assertIs(match_raw_bytes(b"?", "Ж".encode("utf-8")), MatchResult.UNMATCHED)
        self.assertIs(match_raw_bytes(b"??", "Ж".encode("utf-8")), MatchResult.MATCHED)
        self.assertIs(
            match_raw_bytes(
                "[Пп]ривет, [Мм]ир".encode("utf-8"), "Привет, Мир".encode("utf-8")
            ),
            MatchResult.UNMATCHED,
        )

    def test_separator_as_bytes(self) -> None:
        from globmatch import MatchResult, match_raw_bytes

        self.assertIs(match_raw_bytes(b"*", b"a/b", separator=b"/"), MatchResult.UNMATCHED)
        self.assertIs(match_raw_bytes(b"a/*", b"a/b", separator=b"/"), MatchResult.MATCHED)


if __name__ == "__main__":
    raise SystemExit(unittest.main())
