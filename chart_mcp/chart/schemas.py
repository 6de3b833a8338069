import copy
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class ChartSeries(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    data: list[Any]


class ChartOption(BaseModel):
    """ECharts option. Only ``series[0]`` is checked; every other key passes through."""

    model_config = ConfigDict(extra="allow")

    series: list[Any] = Field(min_length=1)

    _payload: dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ChartOption":
        option = cls.model_validate(payload)
        option._payload = copy.deepcopy(payload)
        return option

    @property
    def first_series(self) -> ChartSeries:
        return ChartSeries.model_validate(self.series[0])

    def to_dict(self) -> dict[str, Any]:
        if self._payload:
            return copy.deepcopy(self._payload)
        return self.model_dump()
