from unittest import TestCase, main

from hindi.errors import LexError
from hindi.lexer import Lexer, TokenType, tokenize


class TestLexingWords(TestCase):
    def test_identifies_keywords(self) -> None:
        for keyword in ["ye", "bol", "if", "else"]:
            tks = tokenize(keyword)
            self.assertEqual(1, len(tks), f"'{keyword}' should be a single token")
            self.assertIs(TokenType.KEYWORD, tks[0].typ, f"'{keyword}' should be a keyword")
            self.assertEqual(keyword, tks[0].lexeme)

    def test_can_lex_identifiers(self) -> None:
        lexemes = ["x", "bigger", "x1", "abc123def"]
        tks = tokenize(" ".join(lexemes))
        self.assertEqual(lexemes, [tk.lexeme for tk in tks], "Should be able to split by whitespace")
        self.assertTrue(all(tk.typ is TokenType.IDENTIFIER for tk in tks), "All of these tokens should be identifiers")

    def test_keyword_prefix_is_an_identifier(self) -> None:
        tks = tokenize("iffy yes bolo elsewhere")
        self.assertTrue(all(tk.typ is TokenType.IDENTIFIER for tk in tks), "Words only starting with a keyword are identifiers")
        self.assertEqual(["iffy", "yes", "bolo", "elsewhere"], [tk.lexeme for tk in tks])


class TestLexingNumber(TestCase):
    def test_can_lex_number(self) -> None:
        nums = ["0", "1", "01", "123454567456789"]
        tks = tokenize(" ".join(nums))
        self.assertTrue(all(tk.typ is TokenType.NUMBER for tk in tks))
        self.assertEqual([0, 1, 1, 123454567456789], [tk.value for tk in tks], "Numbers carry their integer value")

    def test_number_then_word_splits(self) -> None:
        tks = tokenize("12ab")
        self.assertEqual([TokenType.NUMBER, TokenType.IDENTIFIER], [tk.typ for tk in tks])

    def test_minus_is_not_part_of_a_number(self) -> None:
        tks = tokenize("-5")
        self.assertEqual([TokenType.OPERATOR, TokenType.NUMBER], [tk.typ for tk in tks])


class TestLexingOperators(TestCase):
    def test_two_character_operators_merge(self) -> None:
        for op in ["==", "!=", "<=", ">="]:
            tks = tokenize(op)
            self.assertEqual(1, len(tks), f"'{op}' should be a single token")
            self.assertIs(TokenType.OPERATOR, tks[0].typ)
            self.assertEqual(op, tks[0].lexeme)

    def test_single_character_operators(self) -> None:
        for op in ["=", "<", ">", "!"]:
            tks = tokenize(f"{op}1")
            self.assertEqual(op, tks[0].lexeme, f"'{op}' not followed by '=' stays on its own")
            self.assertIs(TokenType.NUMBER, tks[1].typ)

    def test_space_prevents_merging(self) -> None:
        tks = tokenize("= =")
        self.assertEqual(["=", "="], [tk.lexeme for tk in tks])

    def test_other_compound_operators_do_not_exist(self) -> None:
        tks = tokenize("+=")
        self.assertEqual(["+", "="], [tk.lexeme for tk in tks])

    def test_all_operators(self) -> None:
        tks = tokenize("+-*/=()?:<>!")
        self.assertEqual(12, len(tks))
        self.assertTrue(all(tk.typ is TokenType.OPERATOR for tk in tks))

    def test_braces_are_delimiters(self) -> None:
        tks = tokenize("{}")
        self.assertEqual([TokenType.DELIMITER, TokenType.DELIMITER], [tk.typ for tk in tks])


class TestLexingWhitespace(TestCase):
    def test_whitespace_only_is_empty(self) -> None:
        self.assertEqual([], tokenize(""))
        self.assertEqual([], tokenize(" \n\t  \r\n"))

    def test_newlines_are_counted(self) -> None:
        tks = tokenize("0\n1\n2\n3")
        self.assertTrue(all(tk.loc.row == i for i, tk in enumerate(tks)), "Each newline should increment row")

    def test_col_is_correctly_calculated(self) -> None:
        tks = tokenize("0\n 1\n  2\n   3")
        self.assertTrue(all(tk.loc.col == i for i, tk in enumerate(tks)), "Each newline should reset col")

    def test_statement_tokens_in_order(self) -> None:
        tks = Lexer("test", "ye x = 10").lex()
        self.assertEqual(
            [(TokenType.KEYWORD, "ye"), (TokenType.IDENTIFIER, "x"), (TokenType.OPERATOR, "="), (TokenType.NUMBER, "10")],
            [(tk.typ, tk.lexeme) for tk in tks])
        self.assertEqual("test", tks[0].loc.file)


class TestLexingErrors(TestCase):
    def test_errors_on_unknown_character(self) -> None:
        with self.assertRaises(LexError) as ctx:
            tokenize("ye x = 1\nbol x % 2")

        self.assertIn("'%'", ctx.exception.msg, "The error should name the offending character")
        self.assertEqual((1, 6), (ctx.exception.loc.row, ctx.exception.loc.col), "The error should point at it")

    def test_errors_on_non_ascii_letters(self) -> None:
        with self.assertRaises(LexError):
            tokenize("ye é = 1")

    def test_errors_on_logical_operators(self) -> None:
        with self.assertRaises(LexError):
            tokenize("x && y")

    def test_errors_on_overlong_number(self) -> None:
        with self.assertRaises(LexError) as ctx:
            tokenize("ye x = " + "9" * 5000)

        self.assertIn("too long", ctx.exception.msg)
        self.assertEqual(7, ctx.exception.loc.col, "The error should point to the start of the number")


if __name__ == '__main__':
    main()
