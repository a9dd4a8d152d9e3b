"""
Command Parser Tests

Run with: python -m pytest seashell/tests -v
"""

import dataclasses
import unittest
from unittest import mock

from seashell.core.config_loader import LimitsConfig
from seashell.exceptions import MalformedOperatorError
from seashell.shell.parser import (
    CommandParser,
    CommandPlan,
    OutputRedirect,
    PipelineStage,
    Token,
    TokenType,
)
from seashell.shell.tokenizer import Tokenizer


class ParserTestCase(unittest.TestCase):

    def setUp(self):
        self.parser = CommandParser(Tokenizer(LimitsConfig(max_line_length=1000, max_tokens=100)))

    def classify(self, line):
        return self.parser.classify(line.split())


class TestTokens(unittest.TestCase):
    """Test operator recognition."""

    def test_operator_types(self):
        self.assertEqual(Token.from_text('|', 0).type, TokenType.PIPE)
        self.assertEqual(Token.from_text('>', 0).type, TokenType.REDIRECT_OUT)
        self.assertEqual(Token.from_text('>>', 0).type, TokenType.REDIRECT_APPEND)
        self.assertEqual(Token.from_text('<', 0).type, TokenType.REDIRECT_IN)
        self.assertEqual(Token.from_text('&', 0).type, TokenType.BACKGROUND)

    def test_near_operators_are_words(self):
        for text in ('>>>', '||', '&&', '2>', 'a>b', '<in'):
            token = Token.from_text(text, 3)
            self.assertEqual(token.type, TokenType.WORD, text)
            self.assertFalse(token.is_operator)


class TestPlainCommands(ParserTestCase):
    """Lines without operators."""

    def test_argv_is_full_token_list(self):
        plan = self.classify("ls -l -a /tmp")

        self.assertEqual(plan.argv, ('ls', '-l', '-a', '/tmp'))
        self.assertFalse(plan.background)
        self.assertIsNone(plan.input_redirect)
        self.assertIsNone(plan.output_redirect)
        self.assertIsNone(plan.pipeline)
        self.assertFalse(plan.is_pipeline)
        self.assertEqual(plan.command, 'ls')

    def test_parse_blank_line(self):
        self.assertIsNone(self.parser.parse("   "))

    def test_parse_tokenizes(self):
        plan = self.parser.parse("echo hi > out.txt\n")
        self.assertEqual(plan.argv, ('echo', 'hi'))
        self.assertEqual(plan.output_redirect, OutputRedirect('out.txt', append=False))

    def test_plan_is_immutable(self):
        plan = self.classify("ls")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            plan.background = True


class TestBackground(ParserTestCase):
    """The & operator."""

    def test_trailing_ampersand(self):
        plan = self.classify("sleep 5 &")

        self.assertTrue(plan.background)
        self.assertEqual(plan.argv, ('sleep', '5'))
        self.assertNotIn('&', plan.argv)

    def test_ampersand_must_be_last(self):
        with self.assertRaises(MalformedOperatorError) as ctx:
            self.classify("sleep & 5")
        self.assertEqual(ctx.exception.operator, '&')
        self.assertEqual(ctx.exception.position, 1)

    def test_ampersand_alone(self):
        with self.assertRaises(MalformedOperatorError):
            self.classify("&")

    def test_background_with_redirect(self):
        plan = self.classify("sort < in.txt > out.txt &")

        self.assertTrue(plan.background)
        self.assertEqual(plan.argv, ('sort',))
        self.assertEqual(plan.input_redirect, 'in.txt')
        self.assertEqual(plan.output_redirect.path, 'out.txt')


class TestRedirection(ParserTestCase):
    """The >, >> and < operators."""

    def test_truncating_output(self):
        plan = self.classify("echo hello > f.txt")

        self.assertEqual(plan.argv, ('echo', 'hello'))
        self.assertEqual(plan.output_redirect.path, 'f.txt')
        self.assertFalse(plan.output_redirect.append)
        self.assertNotIn('f.txt', plan.argv)

    def test_appending_output(self):
        plan = self.classify("echo hello >> log.txt")

        self.assertTrue(plan.output_redirect.append)
        self.assertEqual(plan.output_redirect.operator, '>>')
        self.assertNotIn('log.txt', plan.argv)

    def test_input(self):
        plan = self.classify("cat < f.txt")

        self.assertEqual(plan.argv, ('cat',))
        self.assertEqual(plan.input_redirect, 'f.txt')

    def test_input_and_output(self):
        plan = self.classify("tr a-z A-Z < in.txt > out.txt")

        self.assertEqual(plan.argv, ('tr', 'a-z', 'A-Z'))
        self.assertEqual(plan.input_redirect, 'in.txt')
        self.assertEqual(plan.output_redirect.path, 'out.txt')

    def test_redirect_before_arguments(self):
        plan = self.classify("> out.txt echo hi")

        self.assertEqual(plan.argv, ('echo', 'hi'))
        self.assertEqual(plan.output_redirect.path, 'out.txt')

    def test_last_output_redirect_wins(self):
        plan = self.classify("echo hi > a.txt >> b.txt")

        self.assertEqual(plan.output_redirect, OutputRedirect('b.txt', append=True))

    def test_trailing_operator_is_malformed(self):
        for line in ("ls >", "ls >>", "cat <"):
            with self.assertRaises(MalformedOperatorError, msg=line):
                self.classify(line)

    def test_operator_as_target_is_malformed(self):
        with self.assertRaises(MalformedOperatorError) as ctx:
            self.classify("ls > | wc")
        self.assertIn("expected a file name", ctx.exception.reason)

    def test_redirect_without_command(self):
        with self.assertRaises(MalformedOperatorError) as ctx:
            self.classify("> out.txt")
        self.assertEqual(ctx.exception.operator, '>')


class TestPipeline(ParserTestCase):
    """The | operator."""

    def test_two_stages(self):
        plan = self.classify("ls -l | wc -l")

        self.assertTrue(plan.is_pipeline)
        self.assertEqual(plan.argv, ('ls', '-l'))
        self.assertEqual(plan.pipeline, PipelineStage(('wc', '-l')))
        self.assertEqual(plan.pipeline.command, 'wc')

    def test_outer_redirections_honored(self):
        plan = self.classify("cat < in.txt | sort >> out.txt")

        self.assertEqual(plan.input_redirect, 'in.txt')
        self.assertEqual(plan.output_redirect, OutputRedirect('out.txt', append=True))
        self.assertEqual(plan.argv, ('cat',))
        self.assertEqual(plan.pipeline.argv, ('sort',))

    def test_first_stage_output_moves_to_second_stage(self):
        plan = self.classify("ls > f.txt | wc")

        self.assertEqual(plan.output_redirect, OutputRedirect('f.txt'))
        self.assertEqual(plan.argv, ('ls',))
        self.assertEqual(plan.pipeline.argv, ('wc',))

    def test_second_stage_input_moves_to_first_stage(self):
        plan = self.classify("ls | wc < f.txt")

        self.assertEqual(plan.input_redirect, 'f.txt')
        self.assertEqual(plan.pipeline.argv, ('wc',))

    def test_second_stage_output_wins_over_moved_one(self):
        with self.assertLogs('seashell.parser', level='WARNING'):
            plan = self.classify("ls > a.txt | wc >> b.txt")

        self.assertEqual(plan.output_redirect, OutputRedirect('b.txt', append=True))

    def test_first_stage_input_wins_over_moved_one(self):
        with self.assertLogs('seashell.parser', level='WARNING'):
            plan = self.classify("cat < a.txt | wc < b.txt")

        self.assertEqual(plan.input_redirect, 'a.txt')

    def test_background_pipeline(self):
        plan = self.classify("sleep 1 | cat &")

        self.assertTrue(plan.background)
        self.assertEqual(plan.pipeline.argv, ('cat',))

    def test_missing_second_command(self):
        with self.assertRaises(MalformedOperatorError) as ctx:
            self.classify("ls |")
        self.assertIn("after pipe", ctx.exception.reason)

    def test_missing_first_command(self):
        with self.assertRaises(MalformedOperatorError) as ctx:
            self.classify("| wc")
        self.assertIn("before pipe", ctx.exception.reason)

    def test_second_pipe_rejected(self):
        for line in ("ls | sort | wc", "ls | | wc"):
            with self.assertRaises(MalformedOperatorError, msg=line) as ctx:
                self.classify(line)
            self.assertIn("only one pipe", ctx.exception.reason)

    def test_background_only_second_stage(self):
        with self.assertRaises(MalformedOperatorError):
            self.classify("ls | &")


class TestPurity(ParserTestCase):
    """Classification must not touch the operating system."""

    def test_no_os_side_effects(self):
        with mock.patch('os.pipe') as pipe, \
                mock.patch('os.open') as os_open, \
                mock.patch('os.fork') as fork:
            self.classify("cat < in.txt | sort > out.txt &")

        pipe.assert_not_called()
        os_open.assert_not_called()
        fork.assert_not_called()

    def test_str_round_trip(self):
        line = "cat < in.txt | sort >> out.txt &"
        self.assertEqual(str(self.classify(line)), line)

    def test_direct_construction(self):
        plan = CommandPlan(argv=('true',))
        self.assertEqual(str(plan), 'true')


if __name__ == '__main__':
    unittest.main()
