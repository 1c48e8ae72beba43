"""
Data model for status charts.

All entities are transient: they are built from caller-supplied tables and
attribute records for a single render call and are never cached.
"""

import enum
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union

from .calculations.scales import AxisSpec  # noqa: F401
from .calculations.series import coerce_number
from .constants import NA_STRINGS


class FontStyle(enum.Enum):
    """Text face for timeline rows, numbered like the classic plot font codes."""

    PLAIN = 1
    BOLD = 2
    ITALIC = 3
    BOLD_ITALIC = 4

    @property
    def text_options(self) -> Dict[str, str]:
        """Matplotlib text keyword arguments for this face."""
        bold = self in (FontStyle.BOLD, FontStyle.BOLD_ITALIC)
        italic = self in (FontStyle.ITALIC, FontStyle.BOLD_ITALIC)
        return {
            "fontweight": "bold" if bold else "normal",
            "fontstyle": "italic" if italic else "normal",
        }


@dataclass(frozen=True)
class BenchmarkZones:
    """Lower/upper benchmarks splitting a metric into Red, Amber and Green bands."""

    lower: Optional[float] = None
    upper: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "lower", coerce_number(self.lower))
        object.__setattr__(self, "upper", coerce_number(self.upper))

    @property
    def is_complete(self) -> bool:
        return self.lower is not None and self.upper is not None

    def classify(self, value: Any) -> Optional[str]:
        """
        Return the band containing ``value``.
        
        Values below ``lower`` are Red, values from ``lower`` to ``upper``
        inclusive are Amber, values above ``upper`` are Green. Returns None when
        the value or either threshold is undefined.
        """
        value = coerce_number(value)
        if value is None or not self.is_complete:
            return None
        if value < self.lower:
            return "Red"
        if value <= self.upper:
            return "Amber"
        return "Green"


@dataclass(frozen=True)
class ReferenceLine:
    """A horizontal (labelled) or vertical (bare) reference line."""

    value: Optional[float]
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "value", coerce_number(self.value))

    @property
    def is_defined(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class TimelineMetric:
    """One row of the timeline grid."""

    label: str
    data_col: str
    font: Optional[Union[str, int, FontStyle]] = None

    @classmethod
    def from_spec(cls, spec: Union["TimelineMetric", Mapping[str, Any]]) -> "TimelineMetric":
        """Build a row from a mapping with ``label``, ``dataCol``/``data_col`` and ``font``."""
        if isinstance(spec, TimelineMetric):
            return spec
        data_col = spec.get("data_col", spec.get("dataCol"))
        if "label" not in spec or data_col is None:
            raise KeyError("Timeline metric entries need 'label' and 'dataCol'")
        return cls(label=str(spec["label"]), data_col=str(data_col), font=spec.get("font"))


@dataclass(frozen=True)
class StatusCell:
    """A single drawn cell of the timeline grid."""

    row_label: str
    year: int
    status: str
    font: FontStyle = FontStyle.PLAIN


# Source record keys for each UnitAttributes field
_ATTRIBUTE_KEYS = {
    "name": ("CU_Name", "name", "Name"),
    "rel_abd_lower": ("RelAbd_LBM",),
    "rel_abd_upper": ("RelAbd_UBM",),
    "abs_abd_lower": ("AbsAbd_LBM",),
    "abs_abd_upper": ("AbsAbd_UBM",),
    "long_trend_lower": ("LongTrend_LBM",),
    "long_trend_upper": ("LongTrend_UBM",),
    "perc_change_lower": ("PercChange_LBM",),
    "perc_change_upper": ("PercChange_UBM",),
    "av_gen": ("AvGen", "avGen"),
    "dom_cycle_year": ("DomCycleYear", "domCycleYear"),
    "data_quality": ("DataQualkIdx", "DataQualIdx", "data_quality_index"),
}


@dataclass
class UnitAttributes:
    """
    Attributes of one monitored unit.
    
    Threshold pairs are the lower and upper benchmarks of each status metric.
    ``av_gen`` is the average generation length in years (moving average
    window); ``dom_cycle_year`` is the first dominant cycle year of a cyclic
    unit. Absent optional fields disable the corresponding chart feature.
    """

    name: str = ""
    rel_abd_lower: Optional[float] = None
    rel_abd_upper: Optional[float] = None
    abs_abd_lower: Optional[float] = None
    abs_abd_upper: Optional[float] = None
    long_trend_lower: Optional[float] = None
    long_trend_upper: Optional[float] = None
    perc_change_lower: Optional[float] = None
    perc_change_upper: Optional[float] = None
    av_gen: Optional[int] = None
    dom_cycle_year: Optional[int] = None
    data_quality: Optional[str] = None

    def __post_init__(self):
        for f in fields(self):
            if f.name in ("name", "data_quality"):
                continue
            value = coerce_number(getattr(self, f.name))
            if f.name in ("av_gen", "dom_cycle_year") and value is not None:
                value = int(round(value))
                if f.name == "av_gen" and value < 1:
                    value = None
            setattr(self, f.name, value)
        self.name = "" if self.name is None else str(self.name)
        if self.data_quality is not None:
            quality = str(self.data_quality).strip()
            self.data_quality = None if quality.lower() in NA_STRINGS else quality

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "UnitAttributes":
        """
        Build attributes from a flat record.
        
        Accepts either the field names of this class or the column names used
        by the status scanner tables (``CU_Name``, ``RelAbd_LBM``, ``AvGen``,
        ``DataQualkIdx`` ...). Unknown keys are ignored.
        """
        values = {}
        for field_name, keys in _ATTRIBUTE_KEYS.items():
            for key in (field_name,) + keys:
                if key in record:
                    values[field_name] = record[key]
                    break
        return cls(**values)

    @property
    def is_cyclic(self) -> bool:
        return self.dom_cycle_year is not None

    @property
    def rel_abd_zones(self) -> BenchmarkZones:
        return BenchmarkZones(self.rel_abd_lower, self.rel_abd_upper)

    @property
    def abs_abd_zones(self) -> BenchmarkZones:
        return BenchmarkZones(self.abs_abd_lower, self.abs_abd_upper)

    @property
    def long_trend_zones(self) -> BenchmarkZones:
        return BenchmarkZones(self.long_trend_lower, self.long_trend_upper)

    @property
    def perc_change_zones(self) -> BenchmarkZones:
        return BenchmarkZones(self.perc_change_lower, self.perc_change_upper)

    @property
    def display_title(self) -> str:
        return f"{self.name} (Data = {self.data_quality if self.data_quality else 'NA'})"

