"""Form state and submission state machine for one analysis session.

The controller owns the audience/content form and a single tagged state:

    Idle -> Submitting(request_id) -> Displaying(report)
                                   -> Failed(message)

Field edits never change the state; ``submit`` always re-validates from
scratch. Each submission, including one rejected by validation, gets a new
request id and only the response to the latest id is applied, so a slow
earlier request cannot overwrite a newer outcome.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from app.agents.content_analyzer import ReportRequester, request_analysis
from app.models.analysis import AnalysisReport, InstagramContent, TargetAudience
from app.services.validator import (
    InputValidationError,
    ValidationFailure,
    validate_inputs,
)

logger = logging.getLogger(__name__)

FALLBACK_FAILURE_DETAIL = (
    "Waduh, sepertinya ada sedikit kendala saat analisa. "
    "Tenang, coba lagi beberapa saat ya, semangat!"
)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Submitting:
    request_id: int


@dataclass(frozen=True)
class Displaying:
    report: AnalysisReport


@dataclass(frozen=True)
class Failed:
    message: str
    kind: Optional[ValidationFailure] = None


ControllerState = Union[Idle, Submitting, Displaying, Failed]


def compose_failure_message(exc: Exception) -> str:
    detail = str(exc).strip() or FALLBACK_FAILURE_DETAIL
    return (
        f"Aduh! {detail} Mungkin coba refresh halaman atau cek koneksi internetmu. "
        "Jangan patah semangat!"
    )


class AnalysisController:
    def __init__(self, requester: ReportRequester = request_analysis):
        self._requester = requester
        self.audience = TargetAudience()
        self.content = InstagramContent()
        self.state: ControllerState = Idle()
        self._latest_request_id = 0

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, Submitting)

    @property
    def report(self) -> Optional[AnalysisReport]:
        return self.state.report if isinstance(self.state, Displaying) else None

    @property
    def error(self) -> Optional[str]:
        return self.state.message if isinstance(self.state, Failed) else None

    def on_audience_field_change(self, field: str, value: str) -> None:
        """Update one audience field.

        Raises:
            KeyError: If ``field`` is not a TargetAudience field.
            pydantic.ValidationError: If ``value`` is not valid for the field.
        """
        _assign(self.audience, field, value)

    def on_content_field_change(self, field: str, value: str) -> None:
        """Update one content field; see :meth:`on_audience_field_change`."""
        _assign(self.content, field, value)

    def dismiss_error(self) -> None:
        if isinstance(self.state, Failed):
            self.state = Idle()

    async def submit(self) -> ControllerState:
        # Every submit supersedes any response still in flight, valid or not.
        self._latest_request_id += 1
        request_id = self._latest_request_id
        if isinstance(self.state, Failed):
            self.state = Idle()

        try:
            validate_inputs(self.audience, self.content)
        except InputValidationError as exc:
            self.state = Failed(message=exc.message, kind=exc.kind)
            return self.state

        self.state = Submitting(request_id=request_id)
        logger.info("Submitting analysis request #%s", request_id)

        audience = self.audience.model_copy()
        content = self.content.model_copy()
        try:
            report = await self._requester(audience, content)
        except Exception as exc:
            logger.error("Error during analysis #%s: %s", request_id, exc)
            outcome: ControllerState = Failed(message=compose_failure_message(exc))
        else:
            outcome = Displaying(report=report)

        if request_id != self._latest_request_id:
            logger.info(
                "Discarding stale response #%s (latest is #%s)",
                request_id,
                self._latest_request_id,
            )
            return self.state

        self.state = outcome
        return self.state


def _assign(model, field: str, value: str) -> None:
    if field not in type(model).model_fields:
        raise KeyError(f"Unknown {type(model).__name__} field: {field}")
    setattr(model, field, value)
