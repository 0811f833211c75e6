import logging
import threading
from typing import Any, Callable, Optional, Union

from config.form import FormConfig
from registration import reconciler
from registration.graph import RegistrationGraphFactory, run_submit
from registration.schema import SUCCESS_MESSAGE
from registration.state import (
    Accepted,
    ErrorMap,
    FormPhase,
    FormState,
    FormValues,
    RegistrationData,
    SanitizedValues,
    SubmissionOutcome,
)
from registration.validator import RegistrationValidator

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], Any]


def start_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class RegistrationForm:
    """
    One interactive registration session. Owns the single FormState; the UI
    forwards edit events and reads values, errors and the success flag back.

    The success banner is hidden by a deferred callback scheduled through
    ``scheduler(delay, callback)``. Each acceptance gets a new token, so a
    callback left over from an earlier acceptance is a no-op.
    """

    def __init__(
        self,
        validator: Optional[RegistrationValidator] = None,
        config: Optional[FormConfig] = None,
        scheduler: Optional[Scheduler] = None,
        on_accept: Optional[Callable[[Union[RegistrationData, SanitizedValues]], None]] = None,
    ):
        self.validator = validator or RegistrationValidator()
        self.config = config or FormConfig()
        self.scheduler = scheduler or start_timer
        self.on_accept = on_accept

        self.graph = RegistrationGraphFactory(self.validator).compile()
        self._state = reconciler.initial_state(self.validator.schema)
        self._lock = threading.Lock()

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def values(self) -> FormValues:
        return dict(self._state.values)

    @property
    def errors(self) -> ErrorMap:
        return dict(self._state.errors)

    @property
    def success(self) -> bool:
        return self._state.success

    @property
    def phase(self) -> FormPhase:
        return self._state.phase

    @property
    def success_message(self) -> Optional[str]:
        return SUCCESS_MESSAGE if self._state.success else None

    def edit(self, field: str, value: str) -> FormState:
        with self._lock:
            self._state = reconciler.apply_edit(self._state, field, value)
            return self._state

    def submit(self) -> SubmissionOutcome:
        with self._lock:
            self._state = run_submit(self.graph, self._state)
            outcome = self._state.outcome
            token = self._state.success_token

        if isinstance(outcome, Accepted):
            logger.info("Form data: %s", outcome.data)
            # scheduled before on_accept, which may raise
            self.scheduler(
                self.config.success_display_seconds,
                lambda: self.dismiss_success(token),
            )
            if self.on_accept is not None:
                self.on_accept(outcome.data)
        else:
            logger.info("Submission rejected: %d field(s) invalid", len(outcome.errors))

        return outcome

    def dismiss_success(self, token: Optional[int] = None) -> FormState:
        """
        Hide the success banner. Without a token the current banner is
        dismissed; with one, only the acceptance it names is.
        """
        with self._lock:
            if token is None:
                token = self._state.success_token
            self._state = reconciler.apply_success_timeout(self._state, token)
            return self._state
