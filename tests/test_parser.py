from __future__ import annotations

import unittest

from structswap.parser import (
    RawDeclaration,
    base_type,
    extract_struct_name,
    fold_bare_int,
    parse_fields,
    parse_sign,
    strip_comment,
    tokenize_line,
)
from structswap.tables import Sign


def raw(**tokens) -> RawDeclaration:
    values = dict(sign_token="", long_token="", len_token="", int_token="", name="x", array="", bits="", source="")
    values.update(tokens)
    return RawDeclaration(**values)


class CommentTests(unittest.TestCase):
    def test_strip_trailing_comment(self) -> None:
        self.assertEqual(strip_comment("  int i; // note"), "int i;")

    def test_whole_line_comment(self) -> None:
        self.assertEqual(strip_comment("// int i;"), "")
        self.assertEqual(parse_fields(["// int i;"]), [])

    def test_field_before_comment_survives(self) -> None:
        fields = parse_fields(["int i; // note"])
        self.assertEqual([(f.name, f.type) for f in fields], [("i", "int")])


class StructNameTests(unittest.TestCase):
    def test_extraction(self) -> None:
        self.assertEqual(extract_struct_name(["struct Foo"]), "Foo")
        self.assertEqual(extract_struct_name(["struct Foo {"]), "Foo")
        self.assertEqual(extract_struct_name(["struct Foo { int i; };"]), "Foo")

    def test_missing_name(self) -> None:
        self.assertEqual(extract_struct_name(["int i;", "short s;"]), "")
        self.assertEqual(extract_struct_name([]), "")

    def test_first_match_wins(self) -> None:
        self.assertEqual(extract_struct_name(["// struct Hidden", "struct First {", "struct Second s;"]), "First")

    def test_keyword_boundary(self) -> None:
        self.assertEqual(extract_struct_name(["mystruct Foo;"]), "")


class NormalizationTests(unittest.TestCase):
    def test_bare_int_moves_out_of_len(self) -> None:
        folded = fold_bare_int(raw(len_token="int"))
        self.assertEqual(folded.len_token, "")
        self.assertEqual(folded.int_token, "int")
        self.assertEqual(base_type(folded), "int")

    def test_long_int_keeps_long(self) -> None:
        self.assertEqual(base_type(fold_bare_int(raw(long_token="long", len_token="int"))), "long")

    def test_explicit_int_token_untouched(self) -> None:
        folded = fold_bare_int(raw(len_token="short", int_token="int"))
        self.assertEqual(folded.len_token, "short")
        self.assertEqual(base_type(folded), "short")

    def test_base_type_combines_long(self) -> None:
        self.assertEqual(base_type(raw(long_token="long", len_token="long")), "long long")
        self.assertEqual(base_type(raw(long_token="long", len_token="double")), "long double")
        self.assertEqual(base_type(raw()), "")

    def test_sign(self) -> None:
        self.assertIs(parse_sign("unsigned"), Sign.UNSIGNED)
        self.assertIs(parse_sign("signed"), Sign.SIGNED)
        self.assertIs(parse_sign(""), Sign.DEFAULT)


class TokenizerTests(unittest.TestCase):
    def parse_one(self, text: str):
        fields = parse_fields([text])
        self.assertEqual(len(fields), 1, msg=fields)
        return fields[0]

    def test_types(self) -> None:
        cases = {
            "char c;": "char",
            "short s;": "short",
            "short int s;": "short",
            "int i;": "int",
            "long l;": "long",
            "long int l;": "long",
            "long long ll;": "long long",
            "long long int ll;": "long long",
            "float f;": "float",
            "double d;": "double",
            "long double ld;": "long double",
            "bool b;": "bool",
            "const int k;": "int",
        }
        for text, type_name in cases.items():
            with self.subTest(text=text):
                self.assertEqual(self.parse_one(text).type, type_name)

    def test_unrecognized_type_is_kept(self) -> None:
        field = self.parse_one("uint32_t id;")
        self.assertEqual(field.type, "uint32_t")
        self.assertEqual(field.name, "id")

    def test_signs(self) -> None:
        self.assertIs(self.parse_one("unsigned short s;").sign, Sign.UNSIGNED)
        self.assertIs(self.parse_one("signed char c;").sign, Sign.SIGNED)
        self.assertIs(self.parse_one("short s;").sign, Sign.DEFAULT)

    def test_unsigned_int_bit_field(self) -> None:
        field = self.parse_one("unsigned int flags : 3;")
        self.assertEqual((field.type, field.sign, field.bits, field.is_array), ("int", Sign.UNSIGNED, 3, False))

    def test_array(self) -> None:
        field = self.parse_one("int values[16];")
        self.assertTrue(field.is_array)
        self.assertEqual((field.name, field.type, field.bits), ("values", "int", 0))

    def test_array_with_macro_length(self) -> None:
        self.assertTrue(self.parse_one("double samples[MAX_SAMPLES];").is_array)

    def test_pointers_dropped(self) -> None:
        self.assertEqual(parse_fields(["char *name;", "int* next;", "unsigned x;"]), [])

    def test_struct_header_and_footer_ignored(self) -> None:
        fields = parse_fields(["struct Foo {", "  int i;", "};"])
        self.assertEqual([f.name for f in fields], ["i"])

    def test_multiple_declarations_keep_order(self) -> None:
        fields = parse_fields(["char c; unsigned short s; int i[4]; long l:16;"])
        self.assertEqual([f.name for f in fields], ["c", "s", "i", "l"])
        self.assertEqual([f.type for f in fields], ["char", "short", "int", "long"])

    def test_tokenize_line_source_text(self) -> None:
        raws = tokenize_line("long long ll : 20; float f;")
        self.assertEqual([r.source for r in raws], ["long long ll : 20;", "float f;"])

    def test_empty_input(self) -> None:
        self.assertEqual(parse_fields([]), [])
        self.assertEqual(parse_fields(["", "   ", "\t"]), [])


if __name__ == "__main__":
    unittest.main()
