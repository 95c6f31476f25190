"""Polls GitHub Actions after a push until the latest run finishes."""

import time
from typing import Callable, Optional

from deploy_setup.constants import (
    RUN_POLL_INITIAL_DELAY,
    RUN_POLL_INTERVAL,
    RUN_POLL_MAX_ATTEMPTS,
)
from deploy_setup.exceptions import GitHubCLIError
from deploy_setup.models.results import RunOutcome, VerificationResult, WorkflowRun
from deploy_setup.services.github_service import GitHubCLI


class PushVerifier:
    """
    Fixed-interval poll of ``gh run list``.

    No retries and no backoff: the first gh failure ends the wait as
    UNAVAILABLE, and running out of polls ends it as TIMEOUT.
    """

    def __init__(
        self,
        github: GitHubCLI,
        interval: float = RUN_POLL_INTERVAL,
        max_polls: int = RUN_POLL_MAX_ATTEMPTS,
        initial_delay: float = RUN_POLL_INITIAL_DELAY,
        sleep: Optional[Callable[[float], None]] = None,
        on_poll: Optional[Callable[[WorkflowRun], None]] = None,
    ):
        self.github = github
        self.interval = interval
        self.max_polls = max_polls
        self.initial_delay = initial_delay
        self.sleep = sleep or time.sleep
        self.on_poll = on_poll

    def wait_for_run(self) -> VerificationResult:
        self.sleep(self.initial_delay)

        for poll in range(1, self.max_polls + 1):
            try:
                run = self.github.latest_run()
            except GitHubCLIError:
                return VerificationResult(outcome=RunOutcome.UNAVAILABLE, polls=poll)

            if run is not None:
                if run.is_completed:
                    outcome = (
                        RunOutcome.SUCCESS
                        if run.conclusion == "success"
                        else RunOutcome.FAILURE
                    )
                    return VerificationResult(outcome=outcome, run=run, polls=poll)
                if self.on_poll:
                    self.on_poll(run)

            self.sleep(self.interval)

        return VerificationResult(outcome=RunOutcome.TIMEOUT, polls=self.max_polls)
