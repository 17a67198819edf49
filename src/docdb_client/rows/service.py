"""Row-set queries over pre-built plans."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..core.async_transport import OperationStarter
from ..core.operation import ConnectionParams, Operation, ResponseShape
from ..core.plan import SerializablePlan
from ..core.result import ResultProvider
from .models import RowSet, row_set_from_csv, row_set_from_json, row_set_from_json_seq
from .options import (
    ExplainOptions,
    RowsFormat,
    RowsQueryOptions,
    validate_explain_options,
    validate_rows_options,
)
from .params import build_rows_explain_request, build_rows_query_request

# 404 means "no rows" for these endpoints, not a missing resource.
_ROWS_VALID_STATUS_CODES = frozenset({200, 404})
_ROWS_EMPTY_STATUS_CODES = frozenset({404})


def _row_set_decoder(format: RowsFormat, *, parse_csv: bool) -> Callable[[object], object] | None:
    if format is RowsFormat.JSON:
        return row_set_from_json
    if format is RowsFormat.JSON_SEQ:
        return row_set_from_json_seq  # type: ignore[return-value]
    if format is RowsFormat.CSV and parse_csv:
        return row_set_from_csv  # type: ignore[return-value]
    return None


class AsyncRowsService:
    """Executes and explains plans against ``/v1/rows``."""

    def __init__(self, transport: OperationStarter, connection: ConnectionParams) -> None:
        self._transport = transport
        self._connection = connection

    def query(
        self,
        plan: SerializablePlan,
        options: Mapping[str, object] | RowsQueryOptions | None = None,
        *,
        parse_csv: bool = True,
    ) -> ResultProvider:
        """Execute ``plan`` and return a provider over its rows.

        ``json``, ``json-seq`` and (with ``parse_csv``) ``csv`` results
        settle to a ``RowSet``. ``xml`` settles to an ``Element`` and
        ``multipart`` to the list of decoded parts. Invalid options raise
        ``InvalidOptionError`` or ``InvalidBindingError`` here, before
        anything is sent.
        """

        validated = validate_rows_options(options)
        request = build_rows_query_request(plan, validated, self._connection)
        multipart = validated.format is RowsFormat.MULTIPART
        operation = Operation(
            label="query rows",
            request=request,
            request_shape=ResponseShape.SINGLE,
            response_shape=ResponseShape.MULTIPART if multipart else ResponseShape.SINGLE,
            valid_status_codes=_ROWS_VALID_STATUS_CODES,
            empty_status_codes=_ROWS_EMPTY_STATUS_CODES,
            empty_value=RowSet.empty,
            parse_csv=parse_csv,
            decode_single=_row_set_decoder(validated.format, parse_csv=parse_csv),
            client=self,
        )
        return self._transport.start_request(operation)

    def explain(
        self,
        plan: SerializablePlan,
        options: Mapping[str, object] | ExplainOptions | None = None,
    ) -> ResultProvider:
        validated = validate_explain_options(options)
        operation = Operation(
            label="explain rows",
            request=build_rows_explain_request(plan, validated, self._connection),
            request_shape=ResponseShape.SINGLE,
            response_shape=ResponseShape.SINGLE,
            valid_status_codes=_ROWS_VALID_STATUS_CODES,
            empty_status_codes=_ROWS_EMPTY_STATUS_CODES,
            client=self,
        )
        return self._transport.start_request(operation)


__all__ = [
    "AsyncRowsService",
]
