"""Base model for WAQI-derived data.

Every station-facing model inherits from :class:`WardBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase payload keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips WAQI placeholder
  values (``""``, ``"-"``, ``"--"``, NaN) so the field default is used.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Placeholder strings WAQI uses for "no reading".
_SENTINELS = frozenset({"", "-", "--", "NaN", "nan"})


def is_sentinel(value: Any) -> bool:
    """Return ``True`` when *value* is a WAQI "no reading" placeholder."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() in _SENTINELS:
        return True
    return isinstance(value, float) and math.isnan(value)


class WardBaseModel(BaseModel):
    """Base for wardwatch payload models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * WAQI placeholder values → dropped so the field default is used
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_sentinels(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if not is_sentinel(value)}
