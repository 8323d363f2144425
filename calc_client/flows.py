"""Submit / list / detail flows.

Each flow is one trigger -> network call -> render cycle. Flows receive their
client, input readers, display bindings and executor at construction so they
can run without Streamlit. Every ``ClientError`` ends at the flow as one
notification.

``trigger()`` reads the input on the calling thread and hands the network call
to the executor, so a slow call never holds up another flow. ``run()`` does
the whole cycle inline.
"""

from __future__ import annotations

import json
import logging
import math
import threading
from concurrent.futures import Executor, Future
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Protocol

from calc_client.config import (
    DETAIL_FAILED,
    DETAIL_INDENT,
    DETAIL_MISSING_ID,
    LIST_FAILED,
    LIST_LINE,
    RESULT_PLACEHOLDER,
    SUBMIT_FAILED,
    SUBMIT_SUCCESS,
)
from calc_client.errors import ClientError, ValidationError
from calc_client.models import ExpressionRecord, Identifier

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]
ReadText = Callable[[], str]


class ExpressionService(Protocol):
    def submit(self, expression: str) -> Identifier:
        ...

    def list_all(self) -> List[ExpressionRecord]:
        ...

    def get_by_id(self, identifier: Identifier) -> ExpressionRecord:
        ...


class RequestGeneration:
    """Monotonic request tokens; only the latest issued token is current."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest


def display_text(value: Any) -> str:
    """Text of a JSON value the way a browser template literal shows it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        return ",".join("" if v is None else display_text(v) for v in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _falsy(value: Any) -> bool:
    # null, false, 0, NaN and "" are falsy; [] and {} are not
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def format_record_line(record: ExpressionRecord) -> str:
    result = RESULT_PLACEHOLDER if _falsy(record.result) else display_text(record.result)
    return LIST_LINE.format(
        id=display_text(record.id),
        expression=record.expression,
        status=record.status,
        result=result,
    )


def format_record_detail(record: ExpressionRecord) -> str:
    return json.dumps(record.as_received(), indent=DETAIL_INDENT, ensure_ascii=False)


def render_lines(records: Iterable[ExpressionRecord]) -> List[str]:
    return [format_record_line(r) for r in records]


class _Flow:
    def __init__(self, executor: Optional[Executor] = None):
        self.executor = executor

    def _dispatch(self, fn: Callable[..., None], *args: Any) -> Optional[Future]:
        if self.executor is None:
            fn(*args)
            return None
        return self.executor.submit(fn, *args)


class SubmissionFlow(_Flow):
    """Send the typed expression; report the new ID or the failure."""

    def __init__(
        self,
        client: ExpressionService,
        read_expression: ReadText,
        notify: Notify,
        executor: Optional[Executor] = None,
    ):
        super().__init__(executor)
        self.client = client
        self.read_expression = read_expression
        self.notify = notify

    def trigger(self) -> Optional[Future]:
        # Empty text is forwarded; the service decides what is valid.
        return self._dispatch(self._submit, self.read_expression())

    def run(self) -> None:
        self._submit(self.read_expression())

    def _submit(self, expression: str) -> None:
        try:
            identifier = self.client.submit(expression)
        except ClientError as e:
            logger.warning("Submit failed for %r: %s", expression, e)
            self.notify(SUBMIT_FAILED.format(message=e))
            return
        logger.info("Submitted %r as %s", expression, identifier)
        self.notify(SUBMIT_SUCCESS.format(id=display_text(identifier)))


class ListingFlow(_Flow):
    """Fetch every expression and replace the rendered list."""

    def __init__(
        self,
        client: ExpressionService,
        show_lines: Callable[[List[str]], None],
        notify: Notify,
        executor: Optional[Executor] = None,
    ):
        super().__init__(executor)
        self.client = client
        self.show_lines = show_lines
        self.notify = notify
        self.generation = RequestGeneration()

    def trigger(self) -> Optional[Future]:
        return self._dispatch(self._fetch, self.generation.issue())

    def run(self) -> None:
        self._fetch(self.generation.issue())

    def _fetch(self, token: int) -> None:
        try:
            records = self.client.list_all()
        except ClientError as e:
            if self._stale(token):
                return
            logger.warning("Listing failed: %s", e)
            self.notify(LIST_FAILED.format(message=e))
            return
        if self._stale(token):
            return
        self.show_lines(render_lines(records))

    def _stale(self, token: int) -> bool:
        if self.generation.is_current(token):
            return False
        logger.debug("Dropping stale listing response (token %d)", token)
        return True


class DetailFlow(_Flow):
    """Look up one expression by the typed ID and show it pretty-printed."""

    def __init__(
        self,
        client: ExpressionService,
        read_identifier: ReadText,
        show_detail: Callable[[str], None],
        notify: Notify,
        executor: Optional[Executor] = None,
    ):
        super().__init__(executor)
        self.client = client
        self.read_identifier = read_identifier
        self.show_detail = show_detail
        self.notify = notify
        self.generation = RequestGeneration()

    def trigger(self) -> Optional[Future]:
        try:
            identifier = self._identifier()
        except ValidationError as e:
            self.notify(str(e))
            return None
        return self._dispatch(self._fetch, identifier, self.generation.issue())

    def run(self) -> None:
        try:
            identifier = self._identifier()
        except ValidationError as e:
            self.notify(str(e))
            return
        self._fetch(identifier, self.generation.issue())

    def _identifier(self) -> str:
        identifier = (self.read_identifier() or "").strip()
        if not identifier:
            raise ValidationError(DETAIL_MISSING_ID)
        return identifier

    def _fetch(self, identifier: str, token: int) -> None:
        try:
            record = self.client.get_by_id(identifier)
        except ClientError as e:
            if self._stale(token):
                return
            logger.warning("Lookup of %r failed: %s", identifier, e)
            self.notify(DETAIL_FAILED.format(message=e))
            return
        if self._stale(token):
            return
        self.show_detail(format_record_detail(record))

    def _stale(self, token: int) -> bool:
        if self.generation.is_current(token):
            return False
        logger.debug("Dropping stale detail response (token %d)", token)
        return True


class Flows(NamedTuple):
    submission: SubmissionFlow
    listing: ListingFlow
    detail: DetailFlow


def build_flows(
    client: ExpressionService,
    read_expression: ReadText,
    read_identifier: ReadText,
    show_lines: Callable[[List[str]], None],
    show_detail: Callable[[str], None],
    notify: Notify,
    executor: Optional[Executor] = None,
) -> Flows:
    """Wire the three flows against one client, notifier and executor."""
    return Flows(
        SubmissionFlow(client, read_expression, notify, executor),
        ListingFlow(client, show_lines, notify, executor),
        DetailFlow(client, read_identifier, show_detail, notify, executor),
    )
