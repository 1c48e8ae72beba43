"""
Plot styling defaults and override merging.

Each chart type has a single defaults table with one sub-record per visual
layer. Option names are Matplotlib keyword arguments and are passed through to
the drawing surface unvalidated. Styles are immutable: overrides produce a new
``PlotStyle`` rather than mutating the shared defaults.

Example:
    >>> style = METRIC_PLOT_STYLE.merged({"metric": {"color": "black"}})
    >>> style.layer("metric")["color"]
    'black'
    >>> METRIC_PLOT_STYLE.layer("metric")["color"]
    'darkblue'
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger("status_charts.styles")


StyleOverrides = Optional[Mapping[str, Mapping[str, Any]]]


@dataclass(frozen=True)
class PlotStyle:
    """Immutable per-layer drawing options."""

    layers: Mapping[str, Mapping[str, Any]]

    def __post_init__(self):
        frozen = MappingProxyType(
            {name: MappingProxyType(dict(opts or {})) for name, opts in self.layers.items()}
        )
        object.__setattr__(self, "layers", frozen)

    def layer(self, name: str) -> Dict[str, Any]:
        """Return a mutable copy of the options for one layer."""
        return dict(self.layers.get(name, {}))

    def options(self, name: str, **base: Any) -> Dict[str, Any]:
        """
        Merge a layer's options onto call-specific arguments.
        
        Style options win over ``base`` so callers can restyle anything the
        renderer sets by default, including text alignment.
        """
        merged = dict(base)
        merged.update(self.layers.get(name, {}))
        return merged

    def merged(self, overrides: StyleOverrides) -> "PlotStyle":
        """Return a new style with ``overrides`` shallow-merged per layer."""
        if not overrides:
            return self
        layers = {name: dict(opts) for name, opts in self.layers.items()}
        for name, opts in overrides.items():
            if name not in layers:
                logger.debug(f"Style override for unknown layer '{name}' kept as-is")
            layers.setdefault(name, {}).update(opts or {})
        return PlotStyle(layers)

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: dict(opts) for name, opts in self.layers.items()}


METRIC_PLOT_STYLE = PlotStyle({
    "main": {"fontsize": 12},                                       # axis labels
    "x_axis": {"labelsize": 12},                                    # x tick labels
    "y_axis": {"labelsize": 12},                                    # y tick labels
    "zones": {"linewidth": 0},                                      # benchmark bands
    "hline": {"linestyle": "--", "linewidth": 1.2, "color": "darkgrey"},
    "hline_text": {"fontsize": 11, "color": "dimgrey"},
    "vline": {"linestyle": "--", "linewidth": 2, "color": "darkgrey"},
    "metric": {"linestyle": "-", "marker": "o", "color": "darkblue", "markersize": 5},
    "average": {"linestyle": "-", "linewidth": 1.5, "color": "red"},
    "dom": {"linestyle": "none", "marker": "o", "color": "darkblue",
            "markerfacecolor": "red", "markersize": 7},
    "title": {"fontsize": 15, "color": "darkblue"},
})

TIMELINE_PLOT_STYLE = PlotStyle({
    "main": {"aspect": "equal"},
    "x_axis": {"labelsize": 13},
    "title": {"fontsize": 15, "fontweight": "bold", "color": "darkblue"},
    "label": {"fontsize": 12, "color": "darkblue"},
    "metric_text": {"fontsize": 12, "color": "darkblue"},
    "metric_cell": {"linewidth": 1.5},
})


def resolve_style(
    base: PlotStyle,
    overrides: Union[StyleOverrides, PlotStyle] = None
) -> PlotStyle:
    """Accept either a full ``PlotStyle`` or an override record."""
    if isinstance(overrides, PlotStyle):
        return overrides
    return base.merged(overrides)
