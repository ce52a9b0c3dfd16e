"""Collecting and sending post-submission feedback."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

import click

from tmc_submitter.models import FeedbackQuestion
from tmc_submitter.types import Confirm, SendFeedback

INT_RANGE_PATTERN = re.compile(r"^intrange\[(-?\d+)\.\.(-?\d+)\]$")

PromptFn = Callable[[str, click.ParamType], str | int]
PostAnswers = Callable[[list[dict[str, str | int]], str], bool]


@dataclass(frozen=True)
class PendingFeedback:
    """Feedback questions returned for one submitted exercise."""

    exercise_name: str
    questions: list[FeedbackQuestion]
    answer_url: str


def parse_int_range(kind: str) -> tuple[int, int] | None:
    """Return the bounds of an ``intrange[min..max]`` question kind, or None."""
    match = INT_RANGE_PATTERN.match(kind.strip())
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def _click_prompt(text: str, param_type: click.ParamType) -> str | int:
    if isinstance(param_type, click.IntRange):
        return click.prompt(text, type=param_type)
    return click.prompt(text, type=param_type, default="", show_default=False)


class FeedbackHandler:
    """Asks feedback questions and posts the answers.

    Args:
        post_answers: Sends the answers to the answer URL, returns success.
        prompt: Asks one question with a click parameter type.
    """

    def __init__(self, post_answers: PostAnswers, prompt: PromptFn | None = None) -> None:
        self.post_answers = post_answers
        self.prompt = prompt or _click_prompt

    def ask(self, question: FeedbackQuestion) -> str | int:
        bounds = parse_int_range(question.kind)
        if bounds is None:
            return self.prompt(question.question, click.STRING)
        low, high = bounds
        return self.prompt(f"{question.question} [{low}-{high}]", click.IntRange(low, high))

    def send_feedback(self, questions: list[FeedbackQuestion], answer_url: str) -> bool:
        """Ask every question and send the answers.

        Returns:
            Whether the answers were accepted by the server.
        """
        answers = [{"question_id": question.id, "answer": self.ask(question)} for question in questions]
        return self.post_answers(answers, answer_url)


def send_feedbacks(pending: list[PendingFeedback], confirm: Confirm, send: SendFeedback) -> None:
    """Offer to send feedback for every exercise that requested it.

    A failed dispatch is reported and the remaining exercises are still processed.

    Args:
        pending: Feedback requests in submission order.
        confirm: Asks a yes/no question with a default.
        send: Collects and dispatches answers, returns success.
    """
    for item in pending:
        if not confirm(f"Send feedback for {item.exercise_name}?", True):
            continue
        if send(item.questions, item.answer_url):
            click.echo("Feedback sent.")
        else:
            click.echo("Failed to send feedback.", err=True)
