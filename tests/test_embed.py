"""
Block, chain and recursive expansion tests.
"""

import os
import tempfile
import unittest

import tokel
from tokel.chain import TransformChain
from tokel.embed import Block, Embed, Modified, PassThrough, TransformSequence, Untouched
from tokel.errors import LexerError, ParseError, TokelError, TransformError, format_diagnostic
from tokel.lexer import tokenize
from tokel.parser import TokenCursor
from tokel.token import Ident, Literal
from tokel.token_types import LiteralKind


def expand_tokens(source):
    return tokel.expand_tokens(tokenize(source))


class TestChainParsing(unittest.TestCase):

    def test_steps_and_arguments(self):
        cursor = TokenCursor(tokenize(":ungroup:case{upper}:stringify"))
        chain = TransformChain.parse(cursor)

        self.assertEqual([step.kind.name for step in chain], ["ungroup", "case", "stringify"])
        self.assertEqual(chain.steps[1].arguments, [Ident("upper")])
        self.assertTrue(cursor.is_at_end())

    def test_chain_stops_at_other_tokens(self):
        cursor = TokenCursor(tokenize(":count ; x"))
        chain = TransformChain.parse(cursor)

        self.assertEqual(len(chain), 1)
        self.assertTrue(cursor.check_punct(';'))

    def test_unrecognized_transform(self):
        with self.assertRaises(ParseError) as context:
            TransformChain.parse(TokenCursor(tokenize(":nosuch")))
        message = context.exception.message
        self.assertIn("unrecognized transform: `nosuch`", message)
        self.assertIn("`case` `ungroup` `flatten`", message)

    def test_chain_folds_left_to_right(self):
        chain = TransformChain.parse(TokenCursor(tokenize(":ungroup:count")))
        self.assertEqual(chain.expand(tokenize("(a b c)")), [Literal(LiteralKind.INTEGER, "3")])

    def test_empty_chain_is_rejected(self):
        with self.assertRaises(ValueError):
            TransformChain([])


class TestParsing(unittest.TestCase):
    """Structure produced by the embed parser."""

    def test_segments(self):
        block = Block.parse(TokenCursor(tokenize("< a b:count c >")))

        self.assertIsInstance(block.segments[0], Untouched)
        self.assertIsInstance(block.segments[1], Modified)
        self.assertIsInstance(block.segments[2], Untouched)

    def test_missing_close(self):
        with self.assertRaises(ParseError):
            Block.parse(TokenCursor(tokenize("< a b")))

    def test_sequences(self):
        embed = Embed.parse(tokenize("x [< a >]:count [b] y"))

        self.assertEqual([type(sequence) for sequence in embed.sequences],
                         [PassThrough, TransformSequence, PassThrough, PassThrough])
        self.assertIsNotNone(embed.sequences[1].finalizer)


class TestScenarios(unittest.TestCase):
    """Region expansion examples."""

    def test_flatten(self):
        self.assertEqual(tokel.expand("[< (hello [world]):flatten >]"), "hello world")

    def test_ungroup(self):
        self.assertEqual(tokel.expand("[< (hello [world]):ungroup >]"), "hello [world]")

    def test_reverse(self):
        self.assertEqual(tokel.expand("[< (hello [world]):reverse >]"), "(hello [world])")
        self.assertEqual(tokel.expand("[< (a b c) >]:reverse"), "(a b c)")
        self.assertEqual(tokel.expand("[< (hello [world]):ungroup:reverse >]"), "[world] hello")

    def test_stringify(self):
        self.assertEqual(expand_tokens("[< (hello [world]):stringify >]"),
                         [Literal.string("(hello [world])")])

    def test_ungroup_then_stringify(self):
        self.assertEqual(expand_tokens("[< (hello [world]):ungroup:stringify >]"),
                         [Literal.string("hello [world]")])

    def test_concatenate(self):
        self.assertEqual(expand_tokens("[< (hello [world]):concatenate >]"), [Ident("helloworld")])

    def test_case_in_name_position(self):
        self.assertEqual(tokel.expand("struct [< hello:case{pascal} >];"), "struct Hello ;")

    def test_count(self):
        self.assertEqual(tokel.expand("[< (hello [world]):count >]"), "1")
        self.assertEqual(tokel.expand("[< (hello [world]):ungroup:count >]"), "2")

    def test_untouched_segments(self):
        self.assertEqual(tokel.expand("[< (hello [world]) >]"), "(hello [world])")
        self.assertEqual(tokel.expand("[< >]"), "")

    def test_append_and_prefix(self):
        self.assertEqual(tokel.expand("[< get:append{_value}:concatenate >]"), "get_value")
        self.assertEqual(tokel.expand("[< name:prefix{set_}:concatenate >]"), "set_name")

    def test_unstringify(self):
        self.assertEqual(tokel.expand('[< "a + b":unstringify >]'), "a + b")

    def test_concatenate_string_mode(self):
        self.assertEqual(expand_tokens("[< (a b):ungroup:concatenate{string} >]"),
                         [Literal.string("ab")])


class TestFinalizers(unittest.TestCase):

    def test_finalizer_applies_to_whole_block(self):
        source = "[< ((HELLO)):flatten:case{lower} [world]:ungroup:case{upper} >]:concatenate"
        self.assertEqual(tokel.expand(source), "helloWORLD")

    def test_finalizer_count(self):
        self.assertEqual(tokel.expand("[< a b c >]:count"), "3")

    def test_finalizer_chain(self):
        self.assertEqual(tokel.expand("[< a (b) >]:ungroup:reverse x"), "b a x")


class TestRecursiveExpansion(unittest.TestCase):

    def test_identity_without_regions(self):
        source = 'fn main() { let x = [a, b]; call("s", 1.5, \'c\'); }'
        self.assertEqual(expand_tokens(source), tokenize(source))

    def test_regions_inside_groups(self):
        self.assertEqual(tokel.expand("foo([< x:case{upper} >])"), "foo (X)")
        self.assertEqual(tokel.expand("{ [< a b >]:concatenate }"), "{ ab }")

    def test_innermost_first(self):
        self.assertEqual(tokel.expand("[< [< a:case{upper} >] b >]"), "A b")

    def test_groups_keep_delimiter_and_position(self):
        result = expand_tokens("x\n  ([< a >])")
        self.assertEqual((result[1].line, result[1].column), (2, 3))
        self.assertEqual(str(result[1]), "(a)")

    def test_non_regions_pass_through(self):
        for source in ("[a, b]", "[<]", "[< a", "(< a >)", "[a < b >]"):
            with self.subTest(source=source):
                try:
                    tokens = tokenize(source)
                except LexerError:
                    continue
                self.assertEqual(tokel.expand_tokens(tokens), tokens)

    def test_early_close_passes_through(self):
        self.assertEqual(tokel.expand("[< a > b >]"), "[< a > b >]")

    def test_moderate_nesting(self):
        source = "(" * 100 + "[< x:case{upper} >]" + ")" * 100
        self.assertEqual(tokel.expand(source), "(" * 100 + "X" + ")" * 100)

    def test_deep_nesting_raises_tokel_error(self):
        with self.assertRaises(TokelError) as context:
            tokel.expand("(" * 3000 + "x" + ")" * 3000)
        self.assertEqual(context.exception.message, "token tree nested too deeply")
        self.assertEqual((context.exception.line, context.exception.column), (1, 1))

    def test_embed_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".rs", delete=False, encoding="utf-8") as file:
            file.write("fn [< get value:concatenate >]() {}\n")
            path = file.name
        try:
            self.assertEqual(tokel.embed_file(path), "fn getvalue () {}")
        finally:
            os.unlink(path)


class TestErrors(unittest.TestCase):
    """Failures abort the whole expansion."""

    def test_unrecognized_transform(self):
        with self.assertRaises(ParseError) as context:
            tokel.expand("[< x:nosuchtransform >]")
        error = context.exception
        self.assertIn("unrecognized transform", error.message)
        self.assertIn("`count`", error.message)
        self.assertEqual((error.line, error.column), (1, 6))

    def test_unknown_case(self):
        with self.assertRaises(TransformError) as context:
            tokel.expand("[< x:case{nosuchcase} >]")
        self.assertIn("Unknown case", context.exception.message)

    def test_unknown_mode(self):
        with self.assertRaises(TransformError) as context:
            tokel.expand("[< x:concatenate{badmode} >]")
        self.assertIn("unknown mode", context.exception.message)

    def test_nested_failure_propagates(self):
        with self.assertRaises(ParseError):
            tokel.expand("fn f() { [< x:nosuch >] }")

    def test_later_failure_discards_earlier_output(self):
        with self.assertRaises(TransformError):
            tokel.expand("[< a:case{upper} >] [< b:concatenate{bad} >]")

    def test_diagnostic_points_at_token(self):
        source = "[< x:nosuch >]"
        with self.assertRaises(ParseError) as context:
            tokel.expand(source, "input.rs")

        lines = format_diagnostic(context.exception, source).splitlines()
        self.assertEqual(lines[0], 'ParseError: File "input.rs", line 1, column 6')
        self.assertEqual(lines[-2], "1 | [< x:nosuch >]")
        self.assertEqual(lines[-1], " " * 9 + "^")


if __name__ == '__main__':
    unittest.main()
