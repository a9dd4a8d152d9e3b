"""
Command Parser Module

Classifies a token sequence into a command plan.

Classification is a pure function of the tokens: it never opens files,
creates pipes or touches any other OS resource. Everything it finds is
recorded in an immutable CommandPlan that the process orchestrator
consumes once.

Author: SeaShell Project
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Sequence, Tuple

from .tokenizer import Tokenizer
from seashell.exceptions import MalformedOperatorError
from seashell.logger import get_logger


class TokenType(Enum):
    """Token types for command classification."""
    WORD = "word"
    PIPE = "pipe"
    REDIRECT_OUT = "redirect_out"
    REDIRECT_APPEND = "redirect_append"
    REDIRECT_IN = "redirect_in"
    BACKGROUND = "background"


OPERATORS = {
    '|': TokenType.PIPE,
    '>': TokenType.REDIRECT_OUT,
    '>>': TokenType.REDIRECT_APPEND,
    '<': TokenType.REDIRECT_IN,
    '&': TokenType.BACKGROUND,
}

REDIRECTIONS = (
    TokenType.REDIRECT_OUT,
    TokenType.REDIRECT_APPEND,
    TokenType.REDIRECT_IN,
)


@dataclass(frozen=True)
class Token:
    """A classified token."""
    type: TokenType
    value: str
    position: int

    @classmethod
    def from_text(cls, text: str, position: int) -> 'Token':
        # Only exact standalone matches are operators
        return cls(OPERATORS.get(text, TokenType.WORD), text, position)

    @property
    def is_operator(self) -> bool:
        return self.type is not TokenType.WORD


@dataclass(frozen=True)
class OutputRedirect:
    """Target of a > or >> redirection."""
    path: str
    append: bool = False

    @property
    def operator(self) -> str:
        return '>>' if self.append else '>'


@dataclass(frozen=True)
class PipelineStage:
    """The command after the pipe."""
    argv: Tuple[str, ...]

    @property
    def command(self) -> str:
        return self.argv[0]


@dataclass(frozen=True)
class CommandPlan:
    """
    A classified command line.

    When ``pipeline`` is set, ``argv`` is the first stage,
    ``input_redirect`` feeds the first stage's stdin and
    ``output_redirect`` receives the second stage's stdout.
    """
    argv: Tuple[str, ...]
    background: bool = False
    input_redirect: Optional[str] = None
    output_redirect: Optional[OutputRedirect] = None
    pipeline: Optional[PipelineStage] = None

    @property
    def command(self) -> str:
        return self.argv[0]

    @property
    def is_pipeline(self) -> bool:
        return self.pipeline is not None

    def __str__(self) -> str:
        parts = list(self.argv)
        if self.input_redirect is not None:
            parts += ['<', self.input_redirect]
        if self.pipeline is not None:
            parts += ['|', *self.pipeline.argv]
        if self.output_redirect is not None:
            parts += [self.output_redirect.operator, self.output_redirect.path]
        if self.background:
            parts.append('&')
        return ' '.join(parts)


@dataclass
class _Stage:
    """Mutable stage state used while scanning."""
    argv: List[str] = field(default_factory=list)
    input_redirect: Optional[str] = None
    output_redirect: Optional[OutputRedirect] = None


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Command and arguments
    - A single pipe (|)
    - Redirections (>, >>, <)
    - Background execution (& as the last token)

    Example:
        >>> parser = CommandParser()
        >>> plan = parser.parse("cat < in.txt | sort > out.txt")
        >>> plan.argv, plan.pipeline.argv
        (('cat',), ('sort',))
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None):
        self._tokenizer = tokenizer or Tokenizer()
        self._logger = get_logger('parser')

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def parse(self, line: str) -> Optional[CommandPlan]:
        """
        Tokenize and classify a command line.

        Args:
            line: Command line string

        Returns:
            CommandPlan, or None for a blank line
        """
        tokens = self._tokenizer.tokenize(line)

        if not tokens:
            return None

        return self.classify(tokens)

    def classify(self, tokens: Sequence[str]) -> CommandPlan:
        """
        Classify tokens into a command plan in a single left-to-right scan.

        Args:
            tokens: Tokens as produced by the tokenizer

        Returns:
            CommandPlan

        Raises:
            MalformedOperatorError: If an operator lacks its argument, a
                stage has no command, a second pipe appears, or & is not
                the last token
        """
        lexed = [Token.from_text(text, i) for i, text in enumerate(tokens)]
        stages = [_Stage()]
        background = False

        i = 0
        while i < len(lexed):
            token = lexed[i]
            stage = stages[-1]

            if token.type is TokenType.WORD:
                stage.argv.append(token.value)

            elif token.type is TokenType.BACKGROUND:
                if i != len(lexed) - 1:
                    raise MalformedOperatorError(
                        '&', "background marker must be the last token", i
                    )
                background = True

            elif token.type is TokenType.PIPE:
                if len(stages) > 1:
                    raise MalformedOperatorError(
                        '|', "only one pipe per line is supported", i
                    )
                if not stage.argv:
                    raise MalformedOperatorError(
                        '|', "missing command before pipe", i
                    )
                stages.append(_Stage())

            else:
                target = self._redirect_target(lexed, i)
                if token.type is TokenType.REDIRECT_IN:
                    stage.input_redirect = target
                else:
                    stage.output_redirect = OutputRedirect(
                        path=target,
                        append=token.type is TokenType.REDIRECT_APPEND
                    )
                # Skip the path token
                i += 1

            i += 1

        if len(stages) > 1 and not stages[-1].argv:
            raise MalformedOperatorError('|', "missing command after pipe")

        if not stages[0].argv:
            first = next(t for t in lexed if t.is_operator)
            raise MalformedOperatorError(first.value, "missing command", first.position)

        return self._build_plan(stages, background)

    @staticmethod
    def _redirect_target(lexed: List[Token], index: int) -> str:
        """Return the path that follows a redirection operator."""
        operator = lexed[index]
        if index + 1 >= len(lexed):
            raise MalformedOperatorError(
                operator.value, "missing file name", operator.position
            )

        target = lexed[index + 1]
        if target.is_operator:
            raise MalformedOperatorError(
                operator.value,
                f"expected a file name, found '{target.value}'",
                operator.position
            )
        return target.value

    def _build_plan(self, stages: List[_Stage], background: bool) -> CommandPlan:
        """Freeze scanned stages into a plan, applying the pipe tie-break."""
        first = stages[0]

        if len(stages) == 1:
            return CommandPlan(
                argv=tuple(first.argv),
                background=background,
                input_redirect=first.input_redirect,
                output_redirect=first.output_redirect,
            )

        second = stages[1]

        # The pipe owns the first stage's stdout and the second stage's stdin,
        # so a redirect on the piped side moves to the other stage.
        # A redirect written on the stage it applies to wins.
        input_redirect = first.input_redirect
        if second.input_redirect is not None:
            if input_redirect is None:
                input_redirect = second.input_redirect
            else:
                self._logger.warning(
                    "Input redirection after the pipe ignored",
                    context={'path': second.input_redirect}
                )

        output_redirect = second.output_redirect
        if first.output_redirect is not None:
            if output_redirect is None:
                output_redirect = first.output_redirect
            else:
                self._logger.warning(
                    "Output redirection before the pipe ignored",
                    context={'path': first.output_redirect.path}
                )

        return CommandPlan(
            argv=tuple(first.argv),
            background=background,
            input_redirect=input_redirect,
            output_redirect=output_redirect,
            pipeline=PipelineStage(argv=tuple(second.argv)),
        )
