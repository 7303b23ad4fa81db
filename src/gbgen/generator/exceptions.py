"""Errors raised while generating the features module.

Transport and API failures are gbgen.api.exceptions.APIError and propagate
through the generator unchanged.
"""

from __future__ import annotations

from gbgen.exceptions import GBGenError


class GeneratorError(GBGenError):
    """Base class for generation errors."""


class EmptyResponseError(GeneratorError):
    """Raised when a page of the feature listing has no payload."""


class PaginationStalledError(GeneratorError):
    """Raised when the API reports more pages but the offset does not advance.

    Attributes:
        offset: Offset of the page that was just fetched.
        next_offset: Offset the response pointed to.
    """

    def __init__(self, offset: int, next_offset: int) -> None:
        self.offset = offset
        self.next_offset = next_offset
        super().__init__(
            f"list features: pagination stalled at offset {offset} "
            f"(next offset {next_offset})"
        )


class GenerationCancelledError(GeneratorError):
    """Raised when generation is cancelled or runs past its deadline."""


class UnsupportedValueTypeError(GeneratorError):
    """Raised when a feature's value type has no typed wrapper.

    Attributes:
        feature_id: Id of the offending feature.
        value_type: The value type that was not recognized.
    """

    def __init__(self, feature_id: str, value_type: str) -> None:
        self.feature_id = feature_id
        self.value_type = value_type
        super().__init__(
            f"feature {feature_id!r}: unsupported valueType {value_type!r}"
        )


class FormatError(GeneratorError):
    """Raised when rendered source is not valid, stable Python."""
