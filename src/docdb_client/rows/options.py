"""Row query options: closed enumerations, defaults and fail-fast validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from ..core.errors import InvalidOptionError
from .bindings import Binding, parse_bindings


class RowsFormat(str, Enum):
    JSON = "json"
    XML = "xml"
    JSON_SEQ = "json-seq"
    CSV = "csv"
    MULTIPART = "multipart"


class RowsOutput(str, Enum):
    OBJECT = "object"
    ARRAY = "array"


class RowFormat(str, Enum):
    JSON = "json"
    XML = "xml"


class ColumnTypes(str, Enum):
    ROWS = "rows"
    HEADER = "header"


class ExplainFormat(str, Enum):
    JSON = "json"
    XML = "xml"


E = TypeVar("E", bound=Enum)

# accepted option key -> dataclass field
_ROWS_OPTION_KEYS: dict[str, str] = {
    "format": "format",
    "output": "output",
    "row_format": "row_format",
    "rowFormat": "row_format",
    "column_types": "column_types",
    "columnTypes": "column_types",
    "bindings": "bindings",
}
_LABELS = {
    "format": "rows format",
    "output": "rows output",
    "row_format": "row format",
    "column_types": "column types",
}


def _coerce(
    enum_cls: type[E],
    value: object,
    *,
    option: str,
    default: E,
    label: str | None = None,
) -> E:
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value == value:
            return member
    label = label or _LABELS.get(option, option)
    raise InvalidOptionError(f'invalid {label} "{value}"', option=option, value=value)


@dataclass(slots=True, frozen=True)
class RowsQueryOptions:
    """Validated, fully defaulted options for ``rows.query``."""

    format: RowsFormat = RowsFormat.JSON
    output: RowsOutput = RowsOutput.OBJECT
    row_format: RowFormat = RowFormat.JSON
    column_types: ColumnTypes = ColumnTypes.ROWS
    bindings: tuple[Binding, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "format", _coerce(RowsFormat, self.format, option="format", default=RowsFormat.JSON)
        )
        object.__setattr__(
            self, "output", _coerce(RowsOutput, self.output, option="output", default=RowsOutput.OBJECT)
        )
        object.__setattr__(
            self,
            "row_format",
            _coerce(RowFormat, self.row_format, option="row_format", default=RowFormat.JSON),
        )
        object.__setattr__(
            self,
            "column_types",
            _coerce(ColumnTypes, self.column_types, option="column_types", default=ColumnTypes.ROWS),
        )
        bindings = self.bindings
        if bindings is None:
            bindings = ()
        elif isinstance(bindings, Mapping):
            bindings = parse_bindings(bindings)
        elif not all(isinstance(item, Binding) for item in bindings):
            raise InvalidOptionError("bindings must be a mapping", option="bindings", value=bindings)
        object.__setattr__(self, "bindings", tuple(bindings))

    @property
    def sends_output(self) -> bool:
        """Whether ``output`` and ``column-types`` mean anything to the server."""

        if self.format is RowsFormat.XML:
            return False
        if self.format is RowsFormat.MULTIPART and self.row_format is RowFormat.XML:
            return False
        return True


@dataclass(slots=True, frozen=True)
class ExplainOptions:
    format: ExplainFormat = ExplainFormat.JSON

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "format",
            _coerce(
                ExplainFormat,
                self.format,
                option="format",
                default=ExplainFormat.JSON,
                label="explain format",
            ),
        )


def _reject_unknown(options: Mapping[str, object], known: Mapping[str, str]) -> None:
    for key in options:
        if key not in known:
            raise InvalidOptionError(f'unknown option "{key}"', option=str(key))


def validate_rows_options(
    options: Mapping[str, object] | RowsQueryOptions | None,
) -> RowsQueryOptions:
    """Validate a free-form options mapping and fill in defaults."""

    if options is None:
        return RowsQueryOptions()
    if isinstance(options, RowsQueryOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionError("options must be a mapping", option="options", value=options)
    _reject_unknown(options, _ROWS_OPTION_KEYS)
    normalized: dict[str, object] = {}
    for key, value in options.items():
        normalized[_ROWS_OPTION_KEYS[key]] = value
    return RowsQueryOptions(
        format=normalized.get("format"),  # type: ignore[arg-type]
        output=normalized.get("output"),  # type: ignore[arg-type]
        row_format=normalized.get("row_format"),  # type: ignore[arg-type]
        column_types=normalized.get("column_types"),  # type: ignore[arg-type]
        bindings=normalized.get("bindings"),  # type: ignore[arg-type]
    )


def validate_explain_options(
    options: Mapping[str, object] | ExplainOptions | None,
) -> ExplainOptions:
    if options is None:
        return ExplainOptions()
    if isinstance(options, ExplainOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionError("options must be a mapping", option="options", value=options)
    _reject_unknown(options, {"format": "format"})
    return ExplainOptions(format=options.get("format"))  # type: ignore[arg-type]


__all__ = [
    "RowsFormat",
    "RowsOutput",
    "RowFormat",
    "ColumnTypes",
    "ExplainFormat",
    "RowsQueryOptions",
    "ExplainOptions",
    "validate_rows_options",
    "validate_explain_options",
]
